from .provider_server import ProviderServer
