from pathlib import Path

from layouts.cli import CLIContext, create_app
from layouts.config import LayoutsConfig


class TestCLIContext:
    def test_default_context_loads_config(self) -> None:
        ctx = CLIContext.get_current()

        assert isinstance(ctx.config, LayoutsConfig)
        assert ctx.verbose is False
        assert ctx.config_path is None

    def test_set_and_reset(self) -> None:
        config = LayoutsConfig(default_layout="base")
        ctx = CLIContext(config=config, verbose=True, config_path=Path("layouts.toml"))

        CLIContext.set_current(ctx)
        assert CLIContext.get_current() is ctx

        CLIContext.reset()
        assert CLIContext.get_current() is not ctx


class TestCreateApp:
    def test_registers_commands(self) -> None:
        app = create_app()
        assert {"render", "stack", "list"} <= set(app)
