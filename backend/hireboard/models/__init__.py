from hireboard.models.user import UserRecord

__all__ = ["UserRecord"]
