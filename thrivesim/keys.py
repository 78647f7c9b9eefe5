"""Key bindings and the input listeners for the menu and global utilities."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Iterable

logger = logging.getLogger(__name__)


class Modifier(enum.IntFlag):
    """Modifier keys held during a key press."""

    NONE = 0
    SHIFT = 1
    CTRL = 2
    ALT = 4
    SUPER = 8


@dataclass(frozen=True)
class KeyBinding:
    """A key, named as in the key configuration, plus required modifiers."""

    key: str
    modifiers: int = Modifier.NONE

    def matches(self, key: str, modifiers: int) -> bool:
        """True if key is this key and every required modifier is held."""
        return key == self.key and (self.modifiers & modifiers) == self.modifiers


class KeyConfiguration:
    """Maps control names to the keys bound to them."""

    def __init__(self) -> None:
        self._controls: dict[str, list[KeyBinding]] = {}

    def add_key_if_missing(
        self, name: str, keys: Iterable[str | KeyBinding]
    ) -> bool:
        """Bind keys to a control unless it already has a binding.

        Returns True if the control was added.
        """
        if name in self._controls:
            return False
        self._controls[name] = [
            key if isinstance(key, KeyBinding) else KeyBinding(key) for key in keys
        ]
        return True

    def resolve_first_key(self, name: str) -> KeyBinding:
        """Return the first key bound to a control."""
        bindings = self._controls.get(name)
        if not bindings:
            raise KeyError(f"no key bound to control: {name}")
        return bindings[0]

    def __contains__(self, name: object) -> bool:
        return name in self._controls


class MainMenuKeyListener:
    """Receives key presses in the main menu; no keys are used there yet."""

    def __init__(self) -> None:
        self.enabled = True

    def receive_input(self, key: str, modifiers: int, down: bool) -> bool:
        """Return True if the key press was consumed."""
        if not down or not self.enabled:
            return False
        return False

    def on_mouse_move(self, xmove: int, ymove: int) -> bool:
        """Return True if the mouse movement was consumed."""
        return False


class GlobalUtilityKeyHandler:
    """Handles keys that work everywhere: screenshots and debug toggles."""

    def __init__(
        self,
        keys: KeyConfiguration,
        on_screenshot: Callable[[], None] | None = None,
        on_toggle_overlay: Callable[[], None] | None = None,
        on_toggle_physics: Callable[[], None] | None = None,
    ) -> None:
        self._screenshot = keys.resolve_first_key("Screenshot")
        self._debug_overlay = keys.resolve_first_key("ToggleDebugOverlay")
        self._debug_physics = keys.resolve_first_key("ToggleDebugPhysics")
        self._on_screenshot = on_screenshot
        self._on_toggle_overlay = on_toggle_overlay
        self._on_toggle_physics = on_toggle_physics

    def receive_input(self, key: str, modifiers: int, down: bool) -> bool:
        """Act on a key press; return True if it was consumed."""
        if not down:
            return False

        if self._screenshot.matches(key, modifiers):
            logger.info("Screenshot key pressed")
            if self._on_screenshot is not None:
                self._on_screenshot()
            else:
                logger.warning("Can't take a screenshot")
            return True

        if self._debug_overlay.matches(key, modifiers):
            if self._on_toggle_overlay is not None:
                self._on_toggle_overlay()
            else:
                logger.warning("Can't toggle debug overlay")
            return True

        if self._debug_physics.matches(key, modifiers):
            if self._on_toggle_physics is not None:
                self._on_toggle_physics()
            else:
                logger.warning("Can't toggle debug physics")
            return True

        return False

    def on_mouse_move(self, xmove: int, ymove: int) -> bool:
        """Return True if the mouse movement was consumed."""
        return False