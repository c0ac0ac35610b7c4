"""Small test doubles shared across the suite."""

from unittest.mock import MagicMock


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def genai_response(text):
    """A stand-in for ``GenerateContentResponse`` exposing ``.text``."""
    response = MagicMock()
    response.text = text
    return response


class ScriptedClient:
    """Text generator that replays canned completions and records prompts."""

    def __init__(self, *completions):
        self.completions = list(completions)
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        if not self.completions:
            raise AssertionError("ScriptedClient ran out of completions")
        completion = self.completions.pop(0)
        if isinstance(completion, Exception):
            raise completion
        return completion

    @property
    def calls(self):
        return len(self.prompts)


class RecordingLog:
    """InteractionLog that keeps every record in memory."""

    def __init__(self):
        self.records = []

    def record(self, operation, prompt, raw_response, parsed):
        self.records.append((operation, prompt, raw_response, parsed))
