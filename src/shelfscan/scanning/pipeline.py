# ABOUTME: Scan reconciliation pipeline: gate -> resolve -> dedup -> insert -> notify.
# ABOUTME: Turns raw decoder events into stored books, one asyncio task per admitted ISBN.

import asyncio
import logging
import threading
from collections.abc import Iterator
from typing import Any

from shelfscan.db.collection import BookCollection
from shelfscan.db.mapping import ScannedDraft
from shelfscan.db.store import DuplicateBookError, StoreError
from shelfscan.metadata.resolver import MetadataResolver, ProviderError
from shelfscan.scanning.gate import ScanGate
from shelfscan.scanning.notifier import Notifier
from shelfscan.scanning.outcomes import Duplicate, Error, NotFound, Outcome, Success

logger = logging.getLogger(__name__)

_END = object()


class ScanPipeline:
    """Reconciles admitted barcode scans into the book collection.

    on_decode() is the decoder callback. It runs the gate synchronously and
    hands each admitted ISBN to its own task, so different ISBNs can be in
    flight at once; there is no mutual exclusion between them.

    Whatever happens in a cycle, exactly one outcome is announced, and the
    announcement is what re-arms the gate.
    """

    def __init__(
        self,
        gate: ScanGate,
        resolver: MetadataResolver,
        collection: BookCollection,
        notifier: Notifier,
        category: str | None = None,
    ) -> None:
        self._gate = gate
        self._resolver = resolver
        self._collection = collection
        self._notifier = notifier
        self.category = category
        self._tasks: set[asyncio.Task[Outcome]] = set()

    @property
    def gate(self) -> ScanGate:
        return self._gate

    @property
    def notifier(self) -> Notifier:
        return self._notifier

    @property
    def collection(self) -> BookCollection:
        return self._collection

    def on_decode(self, raw: str) -> asyncio.Task[Outcome] | None:
        """Decoder callback. Returns the task for an admitted scan, else None."""
        isbn = self._gate.admit(raw)
        if isbn is None:
            return None
        task = asyncio.get_running_loop().create_task(self.process(isbn))
        self._tasks.add(task)
        task.add_done_callback(self._forget)
        return task

    async def handle(self, raw: str) -> Outcome | None:
        """Admit and fully process one raw scan. None if the gate rejected it."""
        isbn = self._gate.admit(raw)
        if isbn is None:
            return None
        return await self.process(isbn)

    async def process(self, isbn: str) -> Outcome:
        """Run one candidate through lookup, dedup and insert, then announce."""
        outcome: Outcome = Error(f"Scan of {isbn} aborted")
        try:
            outcome = await self._reconcile(isbn)
        except Exception as exc:
            logger.exception("Unexpected failure while processing %s", isbn)
            outcome = Error(str(exc) or type(exc).__name__)
            raise
        finally:
            self._notifier.announce(outcome, isbn)
        return outcome

    async def consume(self, stream: Iterator[str]) -> None:
        """Feed a blocking decoder stream into on_decode until it ends.

        The stream is read on a daemon thread, so a read blocked on an idle
        scanner never holds up shutdown on Ctrl+C. Callbacks always run on
        the event loop, and an error raised by the stream is re-raised here.
        Waits for in-flight scans before returning.
        """
        loop = asyncio.get_running_loop()
        events: asyncio.Queue[Any] = asyncio.Queue()

        def post(item: Any) -> None:
            try:
                loop.call_soon_threadsafe(events.put_nowait, item)
            except RuntimeError:
                # Loop already closed; nothing is listening.
                return

        def pump() -> None:
            try:
                for raw in stream:
                    post(raw)
            except Exception as exc:
                post(exc)
            finally:
                post(_END)

        threading.Thread(target=pump, name="shelfscan-decoder", daemon=True).start()
        try:
            while True:
                item = await events.get()
                if item is _END:
                    break
                if isinstance(item, Exception):
                    raise item
                self.on_decode(item)
        finally:
            await self.drain()

    async def drain(self) -> None:
        """Wait for every in-flight scan task to finish."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def _forget(self, task: asyncio.Task[Outcome]) -> None:
        self._tasks.discard(task)
        if not task.cancelled():
            # Already logged by process(); retrieving it marks it handled.
            task.exception()

    async def _reconcile(self, isbn: str) -> Outcome:
        try:
            draft = await self._resolver.resolve(isbn)
        except ProviderError as exc:
            return Error(str(exc))

        if draft is None:
            return NotFound(isbn)

        try:
            if await self._collection.has_isbn(draft.isbn):
                return Duplicate(draft.title)
            await self._collection.add(ScannedDraft(draft), self.category)
        except DuplicateBookError:
            # Lost a race with another scan of the same ISBN.
            return Duplicate(draft.title)
        except StoreError as exc:
            logger.warning("Store failure for %s: %s", isbn, exc)
            return Error(str(exc))

        return Success(draft.title)
