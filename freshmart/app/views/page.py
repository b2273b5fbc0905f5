"""In-memory page surface shared by controllers and the web layer.

Controllers write rendered markup into named regions, toggle section views,
mark nav controls active and raise alerts. The web layer renders whatever the
page holds once the controller is done.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set

from markupsafe import Markup

from freshmart.app.common.timers import Scheduler
from freshmart.app.views.render import render_alert


@dataclass
class Alert:
    id: int
    message: str
    level: str = "info"

    @property
    def markup(self) -> Markup:
        return render_alert(self.message, self.level)


class AlertArea:
    """Newest alert first; each one removes itself after `dismiss_after` seconds."""

    def __init__(self, scheduler: Scheduler, dismiss_after: float = 5.0) -> None:
        self.scheduler = scheduler
        self.dismiss_after = dismiss_after
        self.alerts: List[Alert] = []
        self._ids = itertools.count(1)

    def show(self, message: str, level: str = "info") -> Alert:
        alert = Alert(next(self._ids), message, level)
        self.alerts.insert(0, alert)
        self.scheduler.call_later(self.dismiss_after, self.dismiss, alert)
        return alert

    def dismiss(self, alert: Alert) -> None:
        if alert in self.alerts:
            self.alerts.remove(alert)

    @property
    def markup(self) -> Markup:
        return Markup("").join(a.markup for a in self.alerts)


class Page:
    def __init__(self, scheduler: Scheduler, views: Iterable[str] = (), alert_dismiss_after: float = 5.0) -> None:
        self.regions: Dict[str, Markup] = {}
        self.views: Dict[str, bool] = {name: False for name in views}
        self.active_nav: Set[str] = set()
        self.alerts = AlertArea(scheduler, alert_dismiss_after)

    def replace(self, region: str, markup: Markup) -> None:
        self.regions[region] = markup

    def region(self, name: str) -> Markup:
        return self.regions.get(name, Markup(""))

    def show(self, view: str) -> None:
        self.views[view] = True

    def hide(self, view: str) -> None:
        self.views[view] = False

    def is_visible(self, view: str) -> bool:
        return self.views.get(view, False)

    def activate_nav(self, control: Optional[str]) -> None:
        self.active_nav.clear()
        if control:
            self.active_nav.add(control)
