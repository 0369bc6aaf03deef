from datetime import timedelta
from html import escape

from fastapi import APIRouter
from fastapi.responses import HTMLResponse, PlainTextResponse

from api.dependencies.dispatcher import StatsRegistryDep
from infrastructure.services import SettingsDep
from modules.push.stats import StatsEntry, StatsRegistry

router = APIRouter(tags=["System"])

BANNER = "Rocket.Chat Push Gateway\n"

_STATS_PAGE = """<!DOCTYPE html>
<html><head>
<title>Rocket.Chat Push Gateway Stats</title>
<style>
	body {{ font-family: sans-serif; }}
	table, th, td {{ border: 1px solid #ddd; border-collapse: collapse; padding: 2px 6px; }}
</style>
</head><body>
<h2>Rocket.Chat Push Gateway Stats</h2>
<p>Uptime: {uptime}</p>
<table><thead><tr>
<th>id</th><th>ip</th><th>host</th><th>direct</th><th>apn</th><th>fcm</th><th>forwards</th><th>disabled until</th>
</tr></thead><tbody>
{rows}
</tbody></table></body></html>"""


def _format_uptime(uptime: timedelta) -> str:
    return str(timedelta(seconds=int(uptime.total_seconds())))


def _stats_row(registry: StatsRegistry, entry: StatsEntry) -> str:
    disabled_until = entry.disabled_until.get()
    cells = [
        escape(entry.key.unique_id),
        escape(entry.key.client_ip),
        escape(entry.key.host),
        str(registry.direct_deliveries(entry)),
        str(entry.direct_apn.value),
        str(entry.direct_fcm.value),
        str(entry.forwarded.value),
        disabled_until.isoformat() if disabled_until is not None else "",
    ]
    return "<tr>" + "".join(f"<td>{cell}</td>" for cell in cells) + "</tr>"


@router.get("/", response_class=PlainTextResponse)
def get_banner():
    return BANNER


# Used by the load balancer as a healthcheck
@router.get("/version")
def get_version(settings: SettingsDep):
    """Get the version of the application."""
    return {"version": settings.GIT_SHA}


@router.get("/health")
def get_health():
    """Healthcheck endpoint."""
    return {"status": "ok"}


@router.get("/stats", response_class=HTMLResponse)
def get_stats(registry: StatsRegistryDep):
    """HTML table of per-destination counters and breaker state."""
    rows = "\n".join(_stats_row(registry, entry) for entry in registry.snapshot())
    return _STATS_PAGE.format(uptime=_format_uptime(registry.uptime()), rows=rows)
