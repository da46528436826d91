"""
Runs relay recipes one at a time.

A single lock guards the relay lines. ``try_run`` never waits for it: if a
recipe is already pulsing the relays, the caller gets a "busy" outcome right
away and nothing is touched. Once a recipe starts it always runs to the end,
including its holds, and the lock is released on every exit path.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from gofire.control.recipes import RECIPES, Recipe
from gofire.hardware.outputs import HardwareFault, OutputDriver
from gofire.time import LOCAL_TZ

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_BUSY = "busy"
STATUS_FAULT = "fault"


@dataclass(frozen=True)
class Outcome:
    recipe: str
    status: str
    faults: Tuple[str, ...] = ()
    # Monotonic clock readings bracketing the run; None when rejected as busy.
    started: Optional[float] = None
    finished: Optional[float] = None
    finished_at: Optional[datetime] = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

    @property
    def busy(self) -> bool:
        return self.status == STATUS_BUSY

    @property
    def token(self) -> str:
        return f"{self.recipe}_{self.status}"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "recipe": self.recipe,
            "status": self.status,
            "token": self.token,
            "faults": list(self.faults),
            "duration_s": None if self.started is None or self.finished is None else round(self.finished - self.started, 3),
            "finished_at": self.finished_at.strftime("%Y-%m-%d %H:%M:%S") if self.finished_at else None,
        }


class Sequencer:
    def __init__(
        self,
        driver: OutputDriver,
        recipes: Mapping[str, Recipe] = RECIPES,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._driver = driver
        self._recipes = dict(recipes)
        self._sleep = sleep
        self._clock = clock
        self._guard = threading.Lock()
        self._last: Optional[Outcome] = None

    @property
    def recipes(self) -> Tuple[str, ...]:
        return tuple(self._recipes)

    @property
    def busy(self) -> bool:
        return self._guard.locked()

    @property
    def last_outcome(self) -> Optional[Outcome]:
        return self._last

    def try_run(self, name: str) -> Outcome:
        """
        Run recipe ``name`` now, or return a busy outcome if another recipe holds the relays.

        Hardware faults do not stop the recipe: they are logged, the remaining
        assignments and holds still run, and the outcome status is "fault".
        """
        if name not in self._recipes:
            raise KeyError(f"Unknown recipe '{name}'")
        recipe = self._recipes[name]

        if not self._guard.acquire(blocking=False):
            logger.info("Rejected %s: another operation is running", name)
            return Outcome(recipe=name, status=STATUS_BUSY)

        try:
            started = self._clock()
            logger.info("Running %s (%s)", name, recipe.description)
            faults = self._run_steps(recipe)
            finished = self._clock()
        finally:
            self._guard.release()

        outcome = Outcome(
            recipe=name,
            status=STATUS_FAULT if faults else STATUS_OK,
            faults=tuple(faults),
            started=started,
            finished=finished,
            finished_at=datetime.now(LOCAL_TZ),
        )
        self._last = outcome
        if faults:
            logger.error("Finished %s with %d hardware fault(s)", name, len(faults))
        else:
            logger.info("Finished %s in %.2fs", name, finished - started)
        return outcome

    def _run_steps(self, recipe: Recipe) -> list:
        faults = []
        for index, step in enumerate(recipe.steps, start=1):
            for line, value in step.assignments:
                try:
                    self._driver.set_line(line, value)
                except HardwareFault as e:
                    logger.error("%s step %d: %s=%d failed: %s", recipe.name, index, line.value, value, e)
                    faults.append(f"step {index}: {line.value}={value}: {e}")
            if step.hold > 0:
                self._sleep(step.hold)
        return faults
