from app.utils.errors import is_unique_violation, service_operation

__all__ = ["is_unique_violation", "service_operation"]
