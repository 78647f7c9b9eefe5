"""Runs queued auto-evo runs one after another on a background thread."""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Optional

logger = logging.getLogger(__name__)


class AutoEvo:
    """Queue of auto-evo runs worked through by a single background thread.

    A run needs ``begin_executing()``, ``step()`` (True when finished or
    aborted), ``abort()``, ``status_string()`` and the ``in_progress`` and
    ``was_successful`` flags, as RunParameters provides.

    While a run is in progress the patch conditions and species properties
    it uses must not be changed.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._queued_runs: list[Any] = []
        self._running = False
        self._stop_thread = False
        self._currently_running: Optional[Any] = None
        self._thread = threading.Thread(
            target=self._run_background_thread, name="auto-evo", daemon=True
        )
        self._thread.start()

    def begin_run(self, run: Any) -> None:
        """Queue a run to be executed."""
        if run is None:
            raise ValueError("empty run pointer")
        with self._condition:
            self._queued_runs.append(run)
            self._condition.notify_all()

    def abort_simulations(self) -> None:
        """Abort every queued run, including the one executing.

        Meant for quitting the game or exiting to the menu.
        """
        with self._condition:
            for run in self._queued_runs:
                run.abort()
            self._queued_runs.clear()
            self._condition.notify_all()

    def simulation_in_progress(self) -> bool:
        """True while a run is executing.

        A queued run takes a moment to go into running status.
        """
        return self._running

    def queue_size(self) -> int:
        """Number of runs queued, the executing one included."""
        with self._condition:
            return len(self._queued_runs)

    def status_string(self) -> str:
        """Describe the simulation, e.g. "21% done. 21/100 steps. 1 operation(s) in queue."."""
        if not self.simulation_in_progress():
            return "Simulation finished."
        with self._condition:
            if not self._queued_runs:
                return "Simulation finished."
            status = self._queued_runs[0].status_string()
            if len(self._queued_runs) > 1:
                status += f" {len(self._queued_runs) - 1} operation(s) in queue."
            return status

    def close(self) -> None:
        """Stop the background thread, aborting any queued runs."""
        with self._condition:
            self._stop_thread = True
        self.abort_simulations()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join()

    def __enter__(self) -> "AutoEvo":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _run_background_thread(self) -> None:
        while True:
            with self._condition:
                while not self._queued_runs and not self._stop_thread:
                    self._condition.wait()
                if self._stop_thread:
                    return
                logger.info("Auto-evo beginning work on a run")
                self._running = True
                run = self._queued_runs[0]
                self._currently_running = run

            start = time.perf_counter()
            run.begin_executing()

            while not self._stop_thread:
                try:
                    if run.step():
                        break
                except Exception:
                    logger.exception("Exception happened in auto-evo step")

            if run.in_progress or not run.was_successful:
                logger.info("Auto-evo run was aborted or it failed")

            with self._condition:
                for index, queued in enumerate(self._queued_runs):
                    if queued is run:
                        del self._queued_runs[index]
                        break
                self._currently_running = None
                self._running = False
                self._condition.notify_all()

            logger.info(
                "Auto-evo finished working on a run. Elapsed time: %fs",
                time.perf_counter() - start,
            )