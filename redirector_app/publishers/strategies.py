"""
Publisher strategies using Strategy Pattern.

A publisher takes a domain's complete mapping set and makes some external
system serve it as redirects:
- Render: writes a render.yaml blueprint with one redirect route per code
- S3: uploads one empty object per code with a website redirect location
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Mapping, Optional

import yaml

from redirector_app.database.store import atomic_write
from redirector_app.exceptions import ConfigurationError, PublishError
from redirector_app.models.mapping import DomainHandle, ReservedCode
from redirector_app.schemas.config import ConfigEntry
from redirector_app.schemas.render import RenderConfig, Route, Service

logger = logging.getLogger(__name__)


class PublisherStrategy(ABC):
    """
    Abstract base class for publishers.

    The mapping service hands over everything a publisher may need: the
    resolved handle (domain, root, paths), the domain's raw config entry
    and the full current mapping set. Any exception raised here is the
    push failure; the service does not translate it.
    """

    @abstractmethod
    def publish(
        self,
        handle: DomainHandle,
        config: ConfigEntry,
        mappings: Mapping[str, str]
    ) -> None:
        """
        Publish `mappings` for `handle.domain`.

        Args:
            handle: Resolved domain handle
            config: The domain's config entry (backend-specific fields included)
            mappings: Complete code -> url set
        """
        pass


def route_source(code: str) -> str:
    """Redirect source path for a code ("/" for the index code)"""
    if code == ReservedCode.INDEX.value:
        return "/"
    return f"/{code}"


class RenderPublisher(PublisherStrategy):
    """
    Renders mappings into a render.com blueprint (`<root>/render.yaml`).

    Publishing is local only: the blueprint is picked up by render.com
    once the root directory is pushed with git. Render also requires the
    static publish path to exist, so `<root>/build/.gitignore` is created
    if missing.
    """

    OUTPUT_FILENAME = "render.yaml"
    BUILD_PATH = "./build"
    GITIGNORE = "*\n!.gitignore\n"

    def publish(
        self,
        handle: DomainHandle,
        config: ConfigEntry,
        mappings: Mapping[str, str]
    ) -> None:
        output = handle.root / self.OUTPUT_FILENAME

        if self._is_up_to_date(handle):
            logger.info("%s is newer than %s, nothing to do", output, handle.database_path)
            return

        # Sorted, or routes come out in arbitrary order between pushes
        routes = [
            Route(source=route_source(code), destination=mappings[code])
            for code in sorted(mappings)
        ]
        blueprint = RenderConfig(
            services=[
                Service(
                    name=handle.domain,
                    static_publish_path=self.BUILD_PATH,
                    routes=routes
                )
            ]
        )
        data = yaml.safe_dump(
            blueprint.model_dump(by_alias=True),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
        atomic_write(output, data)
        logger.info("Wrote %d routes to %s", len(routes), output)

        self._ensure_build_dir(handle)

    def _is_up_to_date(self, handle: DomainHandle) -> bool:
        """True if render.yaml is newer than the database (best effort)"""
        output = handle.root / self.OUTPUT_FILENAME
        try:
            return output.stat().st_mtime > handle.database_path.stat().st_mtime
        except FileNotFoundError:
            return False

    def _ensure_build_dir(self, handle: DomainHandle) -> None:
        build_dir = handle.root / self.BUILD_PATH
        build_dir.mkdir(exist_ok=True)
        gitignore = build_dir / ".gitignore"
        if not gitignore.exists():
            gitignore.write_text(self.GITIGNORE, encoding="utf-8")


class S3Publisher(PublisherStrategy):
    """
    Pushes mappings to an S3 bucket configured for static website hosting.

    The bucket is named after the domain. Each code becomes an empty
    text/plain object whose WebsiteRedirectLocation is the target url.
    Credentials and region come from the domain's config entry
    (aws_key, aws_secret, aws_region).
    """

    def __init__(
        self,
        timeout: float = 10.0,
        client_factory: Optional[Callable[[ConfigEntry], object]] = None
    ):
        """
        Args:
            timeout: Connect and read timeout per request, in seconds
            client_factory: Builds an S3 client from a config entry
                           (defaults to a boto3 client)
        """
        self.timeout = timeout
        self.client_factory = client_factory or self._boto3_client

    def _boto3_client(self, config: ConfigEntry):
        import boto3
        from botocore.config import Config

        return boto3.client(
            "s3",
            aws_access_key_id=config.aws_key,
            aws_secret_access_key=config.aws_secret,
            region_name=config.aws_region,
            config=Config(connect_timeout=self.timeout, read_timeout=self.timeout),
        )

    def publish(
        self,
        handle: DomainHandle,
        config: ConfigEntry,
        mappings: Mapping[str, str]
    ) -> None:
        if not config.aws_region:
            raise ConfigurationError(
                f"no 'aws_region' found for {handle.domain!r} in config {handle.config_path}"
            )

        client = self.client_factory(config)
        for code in sorted(mappings):
            url = mappings[code]
            logger.debug("Pushing %s => %s", code, url)
            try:
                client.put_object(
                    Bucket=handle.domain,
                    Key=code,
                    ContentType="text/plain",
                    WebsiteRedirectLocation=url,
                )
            except Exception as e:
                raise PublishError(f"push of {code!r} failed: {e}") from e

        logger.info("Pushed %d mappings to s3 bucket %s", len(mappings), handle.domain)
