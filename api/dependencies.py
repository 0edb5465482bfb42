"""
dependencies.py
Carga centralizada de configuración y cliente del proveedor, para que la
API no relea el entorno en cada request.
"""

import logging

from recognition.config import RelaySettings
from recognition.logging_setup import configure_logging
from recognition.provider import AuddClient


# ============================
# SINGLETONS
# ============================

settings = RelaySettings.from_env()
configure_logging(settings.log_level)

log = logging.getLogger("api")


def check_provider_token(cfg: RelaySettings) -> bool:
    """Avisa al arrancar si falta el token; el proceso arranca igual."""
    if not cfg.token_configured:
        log.warning("AUDD_API_TOKEN no definido: /recognize fallará hasta configurarlo.")
        return False
    return True


check_provider_token(settings)

log.info("Inicializando cliente del proveedor (%s)…", settings.audd_api_url)
provider = AuddClient(settings)


def get_settings() -> RelaySettings:
    return settings


def get_provider() -> AuddClient:
    return provider
