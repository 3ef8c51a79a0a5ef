import logging
import time

from fastapi import Request

logger = logging.getLogger("src.api.requests")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once; later calls only adjust the level"""
    logging.basicConfig(format=LOG_FORMAT, datefmt=DATE_FORMAT)
    logging.getLogger().setLevel(level.upper())


async def log_requests(request: Request, call_next):
    """HTTP middleware logging each request and its resulting status"""
    client = request.client.host if request.client else "-"
    logger.info(
        f"Incoming - METHOD: [{request.method}] - URL: [{request.url.path}] - "
        f"AGENT: [{request.headers.get('user-agent', '-')}] - IP: [{client}]"
    )
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        f"Result - METHOD: [{request.method}] - URL: [{request.url.path}] - "
        f"IP: [{client}] - STATUS: [{response.status_code}] - {elapsed_ms:.1f}ms"
    )
    return response
