"""Selection of the source and target provider by identifier."""

from collections.abc import Callable

from worklog_sync.client.errors import ConfigurationError
from worklog_sync.client.fetcher import Fetcher
from worklog_sync.client.uploader import Uploader
from worklog_sync.clockify import ClockifyClient
from worklog_sync.config import Config
from worklog_sync.tempo import TempoClient
from worklog_sync.tempocloud import TempoCloudClient


def _clockify(config: Config) -> ClockifyClient:
    settings = config.provider("clockify")
    if not settings.get("workspace"):
        raise ConfigurationError("missing configuration value 'clockify.workspace'")
    return ClockifyClient(
        api_key=config.secret("clockify-api-key"),
        workspace=settings["workspace"],
        base_url=settings.get("url"),
    )


def _tempo(config: Config) -> TempoClient:
    settings = config.provider("tempo")
    if not settings.get("url") or not settings.get("username"):
        raise ConfigurationError("missing configuration value 'tempo.url' or 'tempo.username'")
    return TempoClient(
        base_url=settings["url"],
        username=settings["username"],
        password=config.secret("tempo-password"),
    )


def _tempo_cloud(config: Config) -> TempoCloudClient:
    settings = config.provider("tempo-cloud")
    if not settings.get("jira-url") or not settings.get("jira-username"):
        raise ConfigurationError(
            "missing configuration value 'tempo-cloud.jira-url' or 'tempo-cloud.jira-username'"
        )
    return TempoCloudClient(
        tempo_token=config.secret("tempo-cloud-token"),
        jira_url=settings["jira-url"],
        jira_username=settings["jira-username"],
        jira_api_token=config.secret("jira-api-token"),
        tempo_url=settings.get("url"),
    )


FETCHERS: dict[str, Callable[[Config], Fetcher]] = {
    "clockify": _clockify,
    "tempo": _tempo,
}

UPLOADERS: dict[str, Callable[[Config], Uploader]] = {
    "tempo": _tempo,
    "tempo-cloud": _tempo_cloud,
}


def get_fetcher(config: Config) -> Fetcher:
    """Create the fetcher named by the "source" option.

    Raises:
        ConfigurationError: If no fetcher exists for the source or its
            settings are incomplete.
    """
    source = config.require("source")
    factory = FETCHERS.get(source)
    if factory is None:
        raise ConfigurationError(f"no source implementation found for {source!r}")
    return factory(config)


def get_uploader(config: Config) -> Uploader:
    """Create the uploader named by the "target" option.

    Raises:
        ConfigurationError: If no uploader exists for the target or its
            settings are incomplete.
    """
    target = config.require("target")
    factory = UPLOADERS.get(target)
    if factory is None:
        raise ConfigurationError(f"no target implementation found for {target!r}")
    return factory(config)
