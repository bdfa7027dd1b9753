"""
Observability setup for the Species evolutionary toolkit.

Population operations emit Logfire spans and log records unconditionally;
this module owns the single place where Logfire itself is configured.
Library code never calls ``logfire.configure`` on import, drivers and the
test suite call :func:`configure_observability` instead.
"""

from typing import Optional

import logfire

from src.core.config import Settings, settings as default_settings


_configured = False


def configure_observability(settings: Optional[Settings] = None, force: bool = False) -> bool:
    """
    Configure Logfire from application settings.

    Args:
        settings: Settings to read Logfire options from (defaults to the global instance)
        force: Reconfigure even if Logfire was already configured by this module

    Returns:
        True if ``logfire.configure`` was called, False if it was already done
    """
    global _configured
    if _configured and not force:
        return False

    settings = settings or default_settings
    options = settings.get_logfire_settings()

    console = False
    if settings.logfire_console:
        console = logfire.ConsoleOptions(min_log_level=settings.log_level.lower())

    logfire.configure(console=console, **options)
    _configured = True

    logfire.info(
        "Observability configured",
        service=settings.logfire_service_name,
        environment=settings.logfire_environment,
        send_to_logfire=options["send_to_logfire"]
    )
    return True


def is_configured() -> bool:
    """Check whether :func:`configure_observability` has run in this process."""
    return _configured
