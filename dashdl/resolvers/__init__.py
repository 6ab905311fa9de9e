"""Link-following resolution stages: page, player config, manifest."""

from dashdl.resolvers.base import Resolver
from dashdl.resolvers.locator import ManifestLocator
from dashdl.resolvers.manifest import ManifestParser
from dashdl.resolvers.page import PageConfigResolver

__all__ = [
    "Resolver",
    "PageConfigResolver",
    "ManifestLocator",
    "ManifestParser",
]
