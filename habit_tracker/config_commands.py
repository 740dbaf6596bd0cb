"""Configuration commands for habit tracker CLI."""

from cyclopts import App

from habit_tracker.config import DEFAULTS, get_config, validate_setting

config_app = App(name="config", help="Manage configuration (backend, json.data_dir)")


def _scope(global_: bool) -> str:
    return "global" if global_ else "local"


@config_app.command
def set(key: str, value: str, global_: bool = False) -> None:
    """Set a configuration setting.

    Args:
        key: Setting name, one of: backend, json.data_dir
        value: New value
        global_: Write to ~/.habit-tracker instead of the current directory
    """
    validate_setting(key, value)
    get_config(use_global=global_).set(key, value)
    print(f"Set {key} = {value} ({_scope(global_)})")


@config_app.command
def unset(key: str, global_: bool = False) -> None:
    """Unset a configuration setting, restoring its default."""
    get_config(use_global=global_).unset(key)
    print(f"Unset {key} ({_scope(global_)})")


@config_app.command
def get(key: str, global_: bool = False) -> None:
    """Show the effective value of a setting."""
    value = get_config(use_global=global_).get(key)
    if value is not None:
        print(f"{key} = {value}")
    elif key in DEFAULTS:
        print(f"{key} = {DEFAULTS[key]} (default)")
    else:
        print(f"{key} is not set")


@config_app.command(name="list")
def list_config(global_: bool = False) -> None:
    """List every setting, marking the ones left at their default."""
    settings = get_config(use_global=global_).list()

    print(f"Settings ({_scope(global_)}):\n")
    for key, default in DEFAULTS.items():
        if key in settings:
            print(f"{key} = {settings[key]}")
        else:
            print(f"{key} = {default} (default)")
    for key, value in settings.items():
        if key not in DEFAULTS:
            print(f"{key} = {value} (unknown)")
