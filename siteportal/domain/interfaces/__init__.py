from .repositories import IFederationRepository, IUserRepository

__all__ = ["IFederationRepository", "IUserRepository"]
