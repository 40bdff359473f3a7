from . import info_command, visibility_command  # noqa: F401
