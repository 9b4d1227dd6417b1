"""Protocols the application layer depends on."""

from __future__ import annotations

from .prompt import PromptPort
from .renderer import RendererPort, StreamPort
from .time import ClockPort, ScheduledTask, SchedulerPort

__all__ = ["ClockPort", "PromptPort", "RendererPort", "ScheduledTask", "SchedulerPort", "StreamPort"]
