"""Playback service for stepping through a substitution schedule during a match."""

from typing import Any, Dict, List, Optional

from .schedule_reconstructor import ScheduleReconstructor
from ..models import TimelineEvent
from ..utils import (
    DEFAULT_LOOKAHEAD_SECONDS,
    PLAYBACK_SKIP_SECONDS,
    PLAYBACK_TICK_SECONDS,
    UPCOMING_WINDOW_SECONDS,
    fmt_mmss,
)


class PlaybackService:
    """
    Service for the live playback clock of a schedule.

    The clock only moves when ``tick()`` is called; the caller invokes it
    once per second from its own timer (UI ``after`` loop, web poll).
    """

    def __init__(self, reconstructor: ScheduleReconstructor):
        self.reconstructor = reconstructor
        self.current_time = 0
        self.playing = False

    @property
    def max_time(self) -> int:
        return self.reconstructor.match_schedule.match_length_seconds

    # ------------------------------------------------------------------
    # Clock controls
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.current_time < self.max_time:
            self.playing = True

    def pause(self) -> None:
        self.playing = False

    def toggle(self) -> None:
        if self.playing:
            self.pause()
        else:
            self.play()

    def reset(self) -> None:
        self.current_time = 0
        self.playing = False

    def seek(self, time: int) -> None:
        """Jump to ``time``, clamped to the match length."""
        self.current_time = max(0, min(int(time), self.max_time))

    def skip(self, seconds: int = PLAYBACK_SKIP_SECONDS) -> None:
        """Move the clock forward (or backward for negative seconds)."""
        self.seek(self.current_time + int(seconds))

    def tick(self) -> bool:
        """
        Advance the clock by one step while playing.

        Returns:
            True if the clock moved
        """
        if not self.playing:
            return False

        self.seek(self.current_time + PLAYBACK_TICK_SECONDS)
        if self.current_time >= self.max_time:
            self.playing = False
        return True

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------
    def current_quarter(self) -> int:
        return self.reconstructor.current_quarter(self.current_time)

    def max_event_time(self) -> int:
        timeline = self.reconstructor.timeline
        if not timeline:
            return self.max_time
        return max(event.time for event in timeline)

    def progress_percent(self) -> float:
        """Share of the timeline already played, capped at 100."""
        max_event_time = self.max_event_time()
        if max_event_time <= 0:
            return 100.0
        return min(self.current_time / max_event_time * 100, 100.0)

    def event_status(self, event: TimelineEvent) -> str:
        """Classify an event as completed, upcoming (within the next minute) or future."""
        if event.time <= self.current_time:
            return "completed"
        if event.time <= self.current_time + UPCOMING_WINDOW_SECONDS:
            return "upcoming"
        return "future"

    def timeline_with_status(self) -> List[Dict[str, Any]]:
        entries = []
        for event in self.reconstructor.timeline:
            data = event.to_dict()
            data["status"] = self.event_status(event)
            data["time_display"] = fmt_mmss(event.time)
            entries.append(data)
        return entries

    def state(self, lookahead_seconds: Optional[int] = None) -> Dict[str, Any]:
        """Return the playback state for display purposes."""
        lookahead = DEFAULT_LOOKAHEAD_SECONDS if lookahead_seconds is None else lookahead_seconds
        snapshot = self.reconstructor.snapshot(self.current_time, lookahead)
        snapshot.update(
            {
                "playing": self.playing,
                "time_display": fmt_mmss(self.current_time),
                "max_time": self.max_time,
                "progress_percent": self.progress_percent(),
                "timeline": self.timeline_with_status(),
            }
        )
        return snapshot
