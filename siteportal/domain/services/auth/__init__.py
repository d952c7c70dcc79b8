from .password_policy import PasswordPolicy, ValidationResult

__all__ = ["PasswordPolicy", "ValidationResult"]
