from .login_provider_client import LoginProviderClient
