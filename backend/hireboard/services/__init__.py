from hireboard.services.users import UserService

__all__ = ["UserService"]
