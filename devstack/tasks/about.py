"""Project help and URL listing, with best-effort router discovery."""

import logging
import re

import httpx

from devstack.config.context import Context

logger = logging.getLogger(__name__)

ROUTER_API_PORT = 8080
ROUTER_API_PATH = "/api/http/routers"
ROUTER_API_TIMEOUT = 5
_HOST_RULE_RE = re.compile(r"^Host\(`(?P<hosts>.*)`\)$")


def router_api_url(ctx: Context) -> str:
    return f"http://{ctx.root_domain}:{ROUTER_API_PORT}{ROUTER_API_PATH}"


def hosts_from_routers(routers, project_name) -> list[str]:
    """Extract hosts of this project's docker routers.

    Skips routers of other projects, the frontend service and rules that
    are not a plain Host(...) match.
    """
    name_re = re.compile(rf"^{re.escape(project_name)}-(.*)@docker$")
    hosts = []
    for router in routers:
        if not name_re.match(router.get("name", "")):
            continue
        if router.get("service") == f"frontend-{project_name}":
            continue
        match = _HOST_RULE_RE.match(router.get("rule", ""))
        if not match:
            continue
        hosts.extend(match.group("hosts").split("`, `"))
    return hosts


async def discover_router_hosts(ctx: Context, client=None) -> list[str]:
    """Hosts published by the reverse proxy, or [] if it cannot be reached."""
    url = router_api_url(ctx)
    try:
        if client is None:
            async with httpx.AsyncClient() as owned_client:
                resp = await owned_client.get(url, timeout=ROUTER_API_TIMEOUT)
        else:
            resp = await client.get(url, timeout=ROUTER_API_TIMEOUT)
        resp.raise_for_status()
        routers = resp.json()
        if not isinstance(routers, list):
            raise ValueError("router list is not a JSON array")
        return hosts_from_routers([r for r in routers if isinstance(r, dict)], ctx.project_name)
    except (httpx.HTTPError, ValueError, TypeError, AttributeError) as e:
        logger.debug(f"Router discovery unavailable at {url}: {e}")
        return []


async def project_urls(ctx: Context, client=None, discover=True) -> list[str]:
    hosts = list(ctx.domains)
    if discover:
        hosts += await discover_router_hosts(ctx, client)
    return [f"https://{host}" for host in hosts]


async def about(run_cmd, ctx: Context, client=None, discover=True) -> list[str]:
    """Print help and the list of project URLs; returns the URLs.

    ``discover=False`` skips the router API and lists configured domains only.
    """
    logger.info("About this project")
    logger.info("------------------")
    logger.info("Run devstack --help to display all available commands.")
    logger.info("Run devstack about to display this help.")
    logger.info("Run devstack <command> --help to display the help of a command.")
    logger.info("")
    logger.info("Available URLs for this project:")
    logger.info("--------------------------------")

    urls = await project_urls(ctx, client, discover=discover)
    for url in urls:
        logger.info(f" * {url}")
    return urls
