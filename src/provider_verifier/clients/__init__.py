from provider_verifier.clients.base import APIClient
