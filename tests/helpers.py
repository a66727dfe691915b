"""Shared test helpers for MyTrainer."""

from mytrainer.workout.engine import SessionController


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class RecordingAnnouncer:
    """Announcer stub that remembers what it was asked to do."""

    def __init__(self):
        self.spoken: list[tuple[str, str]] = []
        self.cancel_count = 0

    def speak(self, text, language_tag):
        self.spoken.append((text, language_tag))

    def cancel_all(self):
        self.cancel_count += 1

    @property
    def texts(self) -> list[str]:
        return [text for text, _ in self.spoken]


def load_workout(controller: SessionController, *exercises, lock: bool = True) -> None:
    """Add ``(name, seconds)`` pairs and optionally save the catalog."""
    for name, seconds in exercises:
        controller.add_exercise(name, seconds)
    if lock:
        controller.lock_catalog()


def run_ticks(controller: SessionController, n: int) -> None:
    for _ in range(n):
        controller.tick()
