"""Authentication use cases."""

from .login import LoginOptions, LoginRequest, LoginResponse, LoginUseCase

__all__ = ["LoginOptions", "LoginRequest", "LoginResponse", "LoginUseCase"]
