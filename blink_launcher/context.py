"""Launcher session owning the catalog, config and launch collaborators."""

import logging
from pathlib import Path
from typing import Callable, Iterable

from blink_launcher.config import Config, load_config
from blink_launcher.engine import DEFAULT_LIMIT, MatchEngine
from blink_launcher.models import ApplicationRecord, CustomApp, InstanceMode, MatchResult
from blink_launcher.policy import LaunchPolicy, mark_as_single_instance
from blink_launcher.registry import SingleInstanceRegistry
from blink_launcher.scanners.apps import fetch_installed_applications, resolve_custom_apps
from blink_launcher.spawner import FireAndForgetSpawn

logger = logging.getLogger(__name__)

ConfigLoader = Callable[[], Config]
AppSource = Callable[[], list[ApplicationRecord]]
CustomAppResolver = Callable[[Iterable[CustomApp]], list[ApplicationRecord]]


class LauncherContext:
    """
    Everything a launcher shell needs between keystrokes.

    The shell constructs one context at startup, calls ``refresh`` whenever
    the user asks for a rescan, and ``search``/``launch`` as they type and
    choose. Nothing here is global; tests build contexts with fake sources.
    """

    def __init__(
        self,
        config_loader: ConfigLoader = load_config,
        app_source: AppSource = fetch_installed_applications,
        registry: SingleInstanceRegistry | None = None,
        spawner: FireAndForgetSpawn | None = None,
        custom_app_resolver: CustomAppResolver = resolve_custom_apps,
    ):
        self._config_loader = config_loader
        self._app_source = app_source
        self._custom_app_resolver = custom_app_resolver
        self.registry = registry or SingleInstanceRegistry()
        self.spawner = spawner or FireAndForgetSpawn()
        self.engine = MatchEngine()
        self.policy = LaunchPolicy()
        self.config = Config()

    @classmethod
    def from_defaults(
        cls,
        config_path: Path | None = None,
        registry_path: Path | None = None,
    ) -> "LauncherContext":
        """Context backed by the user's config, registry and Spotlight."""
        registry = SingleInstanceRegistry(registry_path) if registry_path else SingleInstanceRegistry()
        return cls(config_loader=lambda: load_config(config_path), registry=registry)

    def refresh(self) -> int:
        """
        Reload config and single-instance set, then rebuild the catalog.

        Returns:
            Number of applications in the new catalog
        """
        self.config = self._config_loader()
        self.policy.update(
            single_instance_set=self.registry.load(),
            always_new_window=self.config.always_new_window,
        )

        snapshot = self.engine.rebuild(
            custom_apps=self._custom_app_resolver(self.config.custom_apps),
            discovered_apps=self._app_source(),
            exclusion_rules=self.config.exclusion_rules(),
            alias_rules=self.config.aliases,
        )
        return len(snapshot.catalog)

    def search(self, query: str, limit: int = DEFAULT_LIMIT) -> MatchResult:
        return self.engine.search(query, limit=limit)

    def decide(self, application: ApplicationRecord) -> InstanceMode:
        return self.policy.decide(application)

    def launch(self, application: ApplicationRecord) -> InstanceMode:
        """
        Decide the instance mode and hand the app to the spawner.

        Spawn failures do not propagate; the decided mode is returned either way.
        """
        mode = self.policy.decide(application)
        if not self.spawner.spawn(application.display_name, mode):
            logger.debug("Spawner could not start '%s'", application.display_name)
        return mode

    def mark_single_instance(self, application: ApplicationRecord) -> bool:
        """Persist the app as single-instance and reload the cached set."""
        added = mark_as_single_instance(application, self.registry)
        self.policy.update(single_instance_set=self.registry.load())
        return added
