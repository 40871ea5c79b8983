from statsd import StatsClient
from dbwriter.config import Settings


def make_statsd_client(settings: Settings) -> StatsClient:
    return StatsClient(
        host=settings.statsd_host,
        port=settings.statsd_port,
        prefix=settings.statsd_prefix,
    )
