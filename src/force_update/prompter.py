"""Blocks the user behind an update prompt until a decision is made."""

import logging
from enum import Enum
from typing import Self

from .client import ForceUpdateClient
from .exceptions import ForceUpdateError, PromptError, StoreOpenError
from .lifecycle import AppLifecycle, LifecycleState
from .types import ExceptionHandler, OpenStoreListing, ShowPrompt, StoreUrl

logger = logging.getLogger(__name__)


class PromptOutcome(str, Enum):
    """What the user did with the update prompt.

    DISMISSED means no explicit choice was made, e.g. a back navigation.
    """

    ACCEPTED = "accepted"
    DECLINED = "declined"
    DISMISSED = "dismissed"

    @classmethod
    def from_response(cls, response: bool | None) -> "PromptOutcome":
        """Map a yes/no/no-answer dialog result to an outcome."""
        if response is None:
            return cls.DISMISSED
        return cls.ACCEPTED if response else cls.DECLINED

    @classmethod
    def coerce(cls, response: object) -> "PromptOutcome":
        """Convert whatever a prompt returned into an outcome.

        Accepts outcomes, their string values, and yes/no/no-answer results.

        Raises:
            PromptError: If the response cannot be interpreted.
        """
        if isinstance(response, PromptOutcome):
            return response
        if response is None or isinstance(response, bool):
            return cls.from_response(response)
        if isinstance(response, str):
            try:
                return cls(response)
            except ValueError as e:
                raise PromptError(f"Unknown prompt response: {response!r}") from e
        raise PromptError(f"Unexpected prompt response: {response!r}")


class PromptState(str, Enum):
    """States of the update prompt loop.

    PROMPTING is the only non-terminal state. DISMISSED is reached only when
    cancellation is allowed.
    """

    PROMPTING = "prompting"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    DISMISSED = "dismissed"

    @property
    def is_terminal(self: Self) -> bool:
        """Whether the loop ends in this state."""
        return self is not PromptState.PROMPTING


def transition(outcome: PromptOutcome, allow_cancel: bool) -> PromptState:
    """Return the state following a prompt response.

    Args:
        outcome: What the user did with the prompt.
        allow_cancel: Whether the prompt may be dismissed without a choice.

    Returns:
        PROMPTING if the prompt must be shown again, a terminal state otherwise.
    """
    if outcome is PromptOutcome.ACCEPTED:
        return PromptState.ACCEPTED
    if outcome is PromptOutcome.DECLINED:
        return PromptState.DECLINED
    if allow_cancel:
        return PromptState.DISMISSED
    return PromptState.PROMPTING


class UpdatePrompter:
    """Checks for a forced update on start and resume and prompts the user.

    Attributes:
        client: Client that determines whether an update is required.
        allow_cancel: Whether the user may dismiss the prompt without a choice.
        prompt_count: Number of prompts shown since creation.
    """

    def __init__(  # noqa: PLR0913
        self: Self,
        client: ForceUpdateClient,
        *,
        allow_cancel: bool,
        show_prompt: ShowPrompt,
        open_store_listing: OpenStoreListing,
        on_exception: ExceptionHandler | None = None,
        lifecycle: AppLifecycle | None = None,
    ) -> None:
        """Initialize the prompter.

        Args:
            client: Client that determines whether an update is required.
            allow_cancel: Whether the user may dismiss the prompt.
            show_prompt: Shows the modal prompt and returns the user's response.
                Must return DISMISSED instead of hanging when the user backs out.
                Outcome values as strings and True/False/None are accepted.
            open_store_listing: Opens the store listing URL.
            on_exception: Receives errors raised during a check. When omitted,
                errors propagate to the caller.
            lifecycle: Event source for resume notifications.
        """
        self.client = client
        self.allow_cancel = allow_cancel
        self.prompt_count = 0
        self._show_prompt = show_prompt
        self._open_store_listing = open_store_listing
        self._on_exception = on_exception
        self._lifecycle = lifecycle
        self._is_alert_visible = False
        self._attached = False

    @property
    def is_alert_visible(self: Self) -> bool:
        """Whether the update prompt is currently shown."""
        return self._is_alert_visible

    @property
    def attached(self: Self) -> bool:
        """Whether the prompter listens for lifecycle changes."""
        return self._attached

    async def attach(self: Self) -> PromptState | None:
        """Start listening for resume events and run the initial check.

        Returns:
            Terminal prompt state of the initial check, None if no prompt.
        """
        if not self._attached:
            if self._lifecycle is not None:
                self._lifecycle.add_listener(self._on_lifecycle_change)
            self._attached = True
        return await self.check_and_maybe_prompt()

    def detach(self: Self) -> None:
        """Stop listening for lifecycle changes.

        A check already in progress is not interrupted.
        """
        if self._lifecycle is not None:
            self._lifecycle.remove_listener(self._on_lifecycle_change)
        self._attached = False

    async def _on_lifecycle_change(self: Self, state: LifecycleState) -> None:
        if state is LifecycleState.RESUMED:
            await self.check_and_maybe_prompt()

    async def check_and_maybe_prompt(self: Self) -> PromptState | None:
        """Check whether an update is required and prompt until resolved.

        Does nothing while a prompt is already visible.

        Returns:
            Terminal prompt state, or None if no prompt was shown.

        Raises:
            ForceUpdateError: If a collaborator fails and no exception handler
                was given.
        """
        if self._is_alert_visible:
            logger.debug("Update prompt already visible, skipping check")
            return None

        try:
            url = await self.client.store_url()
            if url is None:
                return None

            decision = await self.client.evaluate()
            if not decision.update_required:
                return None

            return await self._prompt_until_resolved(url)
        except Exception as e:
            if self._on_exception is None:
                raise
            logger.debug("Forwarding %s to exception handler", type(e).__name__)
            self._on_exception(e, e.__traceback__)
            return None

    async def _prompt_until_resolved(self: Self, url: StoreUrl) -> PromptState:
        """Show the prompt until the user makes a decision.

        When cancellation is not allowed, dismissing the prompt shows it
        again, so the only ways out are accepting or declining.
        """
        state = PromptState.PROMPTING
        while not state.is_terminal:
            outcome = await self._prompt()
            state = transition(outcome, self.allow_cancel)
            logger.debug("Prompt outcome %s -> %s", outcome.value, state.value)

        if state is PromptState.ACCEPTED:
            await self._open_store(url)

        logger.info("Update prompt resolved: %s", state.value)
        return state

    async def _prompt(self: Self) -> PromptOutcome:
        self._is_alert_visible = True
        self.prompt_count += 1
        try:
            response = await self._show_prompt(self.allow_cancel)
        except ForceUpdateError:
            raise
        except Exception as e:
            raise PromptError(f"Failed to show update prompt: {e}") from e
        finally:
            self._is_alert_visible = False
        return PromptOutcome.coerce(response)

    async def _open_store(self: Self, url: StoreUrl) -> None:
        try:
            await self._open_store_listing(url)
        except ForceUpdateError:
            raise
        except Exception as e:
            raise StoreOpenError(f"Failed to open {url}: {e}") from e
