from abc import ABC, abstractmethod


class BaseAgent(ABC):
    """A scoring strategy; both local and AI scoring go through ``run``."""

    name: str = "base"

    @abstractmethod
    async def run(self, input_data: dict) -> dict:
        raise NotImplementedError
