from .gotrue_auth_provider import GoTrueAuthProvider

__all__ = ["GoTrueAuthProvider"]
