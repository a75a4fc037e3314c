# -*- coding: utf-8 -*-
"""
QR Generation Controller

Debounces changes to (text, dark color, light color) and runs the pipeline
once input has been quiet for the debounce window. The controller is an
explicit state machine:

    IDLE -> PENDING (timer armed) -> GENERATING -> IDLE

Each armed timer carries a cancellation token. A new change while PENDING
cancels the token and re-arms. A change while GENERATING leaves the running
generation alone but arms a new cycle; when a generation finishes, its result
is applied only if no newer generation has started since ("last request
wins"). Timers come from a pluggable scheduler so the same logic runs on
threading timers or on a deterministic test scheduler.
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from .config import QRConfig
from .errors import CapacityExceededError, EmptyInputError
from .pipeline import generate
from .renderer import RenderedSurface

logger = logging.getLogger(__name__)


class GenerationState(Enum):
    IDLE = 'idle'
    PENDING = 'pending'
    GENERATING = 'generating'


class CancellationToken:
    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ThreadingScheduler:
    """Runs each callback on its own daemon ``threading.Timer``."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


@dataclass(frozen=True)
class GenerationRequest:
    generation: int
    text: str
    dark_color: str
    light_color: str


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one request: a surface, an error, or neither (empty input)."""
    request: GenerationRequest
    surface: Optional[RenderedSurface] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def empty(self) -> bool:
        return self.surface is None and self.error is None


Pipeline = Callable[[str, str, str, QRConfig], RenderedSurface]
ResultCallback = Callable[[GenerationResult], Any]


class GenerationController:
    """
    Owns the in-flight request state between the UI and the pipeline.

    Args:
        on_result: Called with every result that is applied
        config: Defaults for colors, debounce delay and pipeline options
        pipeline: ``pipeline(text, dark, light, config) -> RenderedSurface``
        scheduler: Object with ``call_later(delay, callback) -> handle``;
            ``handle.cancel()`` must stop the callback from running
    """

    def __init__(
        self,
        on_result: Optional[ResultCallback] = None,
        config: Optional[QRConfig] = None,
        pipeline: Pipeline = generate,
        scheduler: Any = None
    ):
        self.config = config or QRConfig()
        self._on_result = on_result
        self._pipeline = pipeline
        self._scheduler = scheduler or ThreadingScheduler()
        self._lock = threading.Lock()
        # Held while a result is applied and handed to on_result. Reentrant so
        # that on_result may itself clear the text.
        self._publish_lock = threading.RLock()

        self._text = ''
        self._dark_color = self.config.dark_color
        self._light_color = self.config.light_color

        self._timer: Any = None
        self._token: Optional[CancellationToken] = None
        self._requests = 0
        self._started = 0
        self._in_flight = 0
        self._disposed = False

        self.surface: Optional[RenderedSurface] = None
        self.latest: Optional[GenerationResult] = None

    @property
    def text(self) -> str:
        return self._text

    @property
    def dark_color(self) -> str:
        return self._dark_color

    @property
    def light_color(self) -> str:
        return self._light_color

    @property
    def state(self) -> GenerationState:
        with self._lock:
            if self._timer is not None:
                return GenerationState.PENDING
            if self._in_flight:
                return GenerationState.GENERATING
            return GenerationState.IDLE

    @property
    def is_generating(self) -> bool:
        return self.state is GenerationState.GENERATING

    def set_text(self, text: str) -> Optional[GenerationRequest]:
        return self.request_generation(text=text)

    def set_dark_color(self, color: str) -> Optional[GenerationRequest]:
        return self.request_generation(dark_color=color)

    def set_light_color(self, color: str) -> Optional[GenerationRequest]:
        return self.request_generation(light_color=color)

    def _cancel_pending(self) -> None:
        if self._token is not None:
            self._token.cancel()
            self._timer.cancel()
        self._timer = None
        self._token = None

    def request_generation(
        self,
        text: Optional[str] = None,
        dark_color: Optional[str] = None,
        light_color: Optional[str] = None
    ) -> Optional[GenerationRequest]:
        """
        Record an input change and (re)start the debounce window.

        Arguments left as None keep their previous value. Empty or
        whitespace-only text skips the pipeline and publishes an empty
        result right away. Returns the request, or None after ``dispose``.
        """
        with self._lock:
            if self._disposed:
                return None
            if text is not None:
                self._text = text
            if dark_color is not None:
                self._dark_color = dark_color
            if light_color is not None:
                self._light_color = light_color

            self._cancel_pending()
            self._requests += 1
            request = GenerationRequest(self._requests, self._text, self._dark_color, self._light_color)

            if request.text.strip():
                token = CancellationToken()
                self._token = token
                self._timer = self._scheduler.call_later(
                    self.config.debounce_seconds, lambda: self._fire(request, token))
                return request

            # Supersede anything still running
            self._started = request.generation

        logger.debug("Request %d has empty text, skipping generation", request.generation)
        self._deliver(GenerationResult(request))
        return request

    def _fire(self, request: GenerationRequest, token: CancellationToken) -> None:
        with self._lock:
            if token.cancelled or self._disposed:
                return
            self._timer = None
            self._token = None
            self._started = request.generation
            self._in_flight += 1

        try:
            surface = self._pipeline(request.text, request.dark_color, request.light_color, self.config)
            result = GenerationResult(request, surface=surface)
        except EmptyInputError:
            result = GenerationResult(request)
        except CapacityExceededError as exc:
            logger.warning("Request %d does not fit in a QR code: %s", request.generation, exc)
            result = GenerationResult(request, error=exc)
        except Exception as exc:
            logger.exception("Generation %d failed", request.generation)
            result = GenerationResult(request, error=exc)

        with self._lock:
            self._in_flight -= 1
        self._deliver(result)

    def _deliver(self, result: GenerationResult) -> None:
        """
        Apply ``result`` and hand it to ``on_result`` if it is still current.

        Deliveries are serialized and the generation check happens inside the
        same critical section, so the callback never sees an older generation
        after a newer one.
        """
        request = result.request
        with self._publish_lock:
            with self._lock:
                if self._disposed:
                    return
                if request.generation != self._started:
                    logger.debug("Discarding result of request %d, superseded by %d",
                                 request.generation, self._started)
                    return
                if result.surface is not None:
                    self.surface = result.surface
                elif result.empty:
                    self.surface = None
                self.latest = result
            if self._on_result is not None:
                self._on_result(result)

    def dispose(self) -> None:
        """Cancel any pending timer and drop results still in flight."""
        with self._lock:
            self._disposed = True
            self._cancel_pending()
