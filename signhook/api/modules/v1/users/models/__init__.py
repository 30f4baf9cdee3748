from .users_model import User

__all__ = ["User"]
