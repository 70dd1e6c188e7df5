"""
Operator confirmation gate - approval boundary for every mutating action
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional


logger = logging.getLogger(__name__)


class ConfirmationGate(ABC):
    """
    Approves or declines one action at a time

    There is no batch approval. Declining returns False and only skips the
    action that was asked about.
    """

    @abstractmethod
    def confirm(self, action_description: str) -> bool:
        """Return True if the operator approves the described action"""


class InteractiveConfirmation(ConfirmationGate):
    """
    Terminal prompt. Only the exact answer "y" approves; anything else,
    including "Y", "yes" and end of input, declines without re-prompting.
    """

    def __init__(self, input_func: Callable[[str], str] = input):
        self.input_func = input_func

    def confirm(self, action_description: str) -> bool:
        try:
            answer = self.input_func(f"{action_description} [y/n]: ")
        except EOFError:
            logger.warning(f"No answer received, declining: {action_description}")
            return False

        approved = answer == "y"
        if not approved:
            logger.info(f"Declined by operator: {action_description}")
        return approved


class ScriptedConfirmation(ConfirmationGate):
    """
    Replays a fixed sequence of answers

    Prompts are recorded in order so callers can check what was asked.
    Once the answers run out, default is returned.
    """

    def __init__(self, answers: Optional[Iterable[bool]] = None, default: bool = False):
        self._answers = list(answers or [])
        self.default = default
        self.prompts: List[str] = []

    @classmethod
    def approve_all(cls) -> 'ScriptedConfirmation':
        return cls(default=True)

    @classmethod
    def decline_all(cls) -> 'ScriptedConfirmation':
        return cls(default=False)

    def confirm(self, action_description: str) -> bool:
        self.prompts.append(action_description)
        if self._answers:
            return self._answers.pop(0)
        return self.default
