from .federation_repository import FederationRepository
from .user_repository import UserRepository

__all__ = ["FederationRepository", "UserRepository"]
