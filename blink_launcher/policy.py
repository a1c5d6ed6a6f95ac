"""Instance-mode decisions for launching applications."""

import logging
from typing import Iterable

from blink_launcher.models import ApplicationRecord, InstanceMode
from blink_launcher.registry import SingleInstanceRegistry

logger = logging.getLogger(__name__)


def decide_instance_mode(
    application: ApplicationRecord,
    single_instance_set: set[str] | frozenset[str],
    always_new_window: bool = False,
) -> InstanceMode:
    """
    Decide whether a launch should reuse a running instance.

    Membership in the single-instance set always wins and yields
    REUSE_EXISTING. Every other application gets NEW_INSTANCE; the
    ``always_new_window`` flag and the default behavior agree on that.

    Example:
        >>> app = ApplicationRecord(display_name="Finder", path="/System/Library/CoreServices/Finder.app")
        >>> decide_instance_mode(app, {"Finder"}, always_new_window=True)
        <InstanceMode.REUSE_EXISTING: 'REUSE_EXISTING'>
    """
    if application.display_name in single_instance_set:
        return InstanceMode.REUSE_EXISTING
    return InstanceMode.NEW_INSTANCE


def mark_as_single_instance(application: ApplicationRecord, registry: SingleInstanceRegistry) -> bool:
    """
    Record an application as single-instance.

    Returns:
        True if it was added, False if the registry already had it
    """
    return registry.add(application.display_name)


class LaunchPolicy:
    """Launch decisions bound to the current single-instance set and flags."""

    def __init__(self, single_instance_set: Iterable[str] = (), always_new_window: bool = False):
        self.single_instance_set = frozenset(single_instance_set)
        self.always_new_window = always_new_window

    def update(
        self,
        single_instance_set: Iterable[str] | None = None,
        always_new_window: bool | None = None,
    ) -> None:
        """Replace the cached set and/or flag; None leaves a value as-is."""
        if single_instance_set is not None:
            self.single_instance_set = frozenset(single_instance_set)
        if always_new_window is not None:
            self.always_new_window = always_new_window

    def decide(self, application: ApplicationRecord) -> InstanceMode:
        mode = decide_instance_mode(application, self.single_instance_set, self.always_new_window)
        logger.debug("Instance mode for '%s': %s", application.display_name, mode.value)
        return mode
