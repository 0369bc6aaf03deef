from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, TYPE_CHECKING

import httpx
from fastapi import FastAPI
from structlog.stdlib import BoundLogger

from infrastructure.logging.setup import configure_logging
from infrastructure.services import get_settings
from modules.push import (
    DestinationResolver,
    Forwarder,
    PushDispatcher,
    StatsRegistry,
)
from modules.push.providers import ApnsProvider, FcmProvider

if TYPE_CHECKING:
    from infrastructure.configuration import Settings


def _get_logger(settings: "Settings") -> BoundLogger:
    return configure_logging(settings=settings)


def _list_configs(settings: "Settings", logger: BoundLogger) -> None:
    config_settings: dict[str, list[object]] = {"settings": []}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)


def _load_apns(settings: "Settings", logger: BoundLogger) -> Optional[ApnsProvider]:
    if not settings.apns.is_configured:
        logger.info("apns_provider_disabled", reason="credentials_not_configured")
        return None

    try:
        provider = ApnsProvider.from_settings(settings.apns)
    except Exception as exc:
        logger.error("apns_provider_activation_failed", error=str(exc))
        raise

    logger.info(
        "apns_provider_activated",
        topic=settings.apns.APNS_TOPIC,
        sandbox=settings.apns.APNS_USE_SANDBOX,
    )
    return provider


def _load_fcm(settings: "Settings", logger: BoundLogger) -> Optional[FcmProvider]:
    if not settings.fcm.is_configured:
        logger.info("fcm_provider_disabled", reason="credentials_not_configured")
        return None

    try:
        provider = FcmProvider.from_settings(settings.fcm)
    except Exception as exc:
        logger.error("fcm_provider_activation_failed", error=str(exc))
        raise

    logger.info("fcm_provider_activated")
    return provider


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger = _get_logger(settings)

    app.state.settings = settings
    app.state.logger = logger

    logger.info("application_startup")
    _list_configs(settings, logger)

    relay = settings.relay
    registry = StatsRegistry(disable_seconds=relay.FORWARDING_DISABLE_SECONDS)
    http_client = httpx.AsyncClient(timeout=relay.FORWARD_TIMEOUT_SECONDS)

    apns = _load_apns(settings, logger)
    fcm = _load_fcm(settings, logger)

    dispatcher = PushDispatcher(
        registry=registry,
        resolver=DestinationResolver(
            apns_topic=settings.apns.APNS_TOPIC,
            upstream_topic=relay.UPSTREAM_APNS_TOPIC,
        ),
        forwarder=Forwarder(
            client=http_client,
            registry=registry,
            upstream_host=relay.UPSTREAM_GATEWAY,
            scheme=relay.UPSTREAM_SCHEME,
        ),
        apns=apns,
        fcm=fcm,
        placeholder_text=relay.FILTER_PLACEHOLDER_TEXT,
    )

    app.state.stats_registry = registry
    app.state.http_client = http_client
    app.state.dispatcher = dispatcher

    logger.info(
        "push_gateway_ready",
        upstream=relay.UPSTREAM_GATEWAY,
        apns_enabled=apns is not None,
        fcm_enabled=fcm is not None,
    )

    yield

    logger.info("application_shutdown")

    await http_client.aclose()
    if fcm is not None:
        fcm.close()
