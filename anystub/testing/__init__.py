from .scope import any_instance_scope

__all__: list[str] = ["any_instance_scope"]
