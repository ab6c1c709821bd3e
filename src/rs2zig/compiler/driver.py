"""
Translation Driver

Walks the program's items in source order and applies the two-tier failure
policy:

- SoftTranslationError: write the placeholder comment, go on
- HardTranslationError: log, attach the item's location, abort the run

Lines written before an abort stay in the sink.
"""

from enum import Enum
from typing import List, Optional, TextIO
import logging

from ..shared import Program, Item, SoftTranslationError, HardTranslationError
from ..frontend.parser import Parser
from ..codegen import TranslationContext, LineSink, ItemTranslator
from ..utils.config import DEFAULT_LINK_NAME

logger = logging.getLogger(__name__)


class DriverState(Enum):
    READY = "ready"
    PER_ITEM = "per_item"
    DONE = "done"


class SkippedItem:
    """An item replaced by a placeholder comment"""
    def __init__(self, item: Item, error: SoftTranslationError):
        self.item = item
        self.error = error

    @property
    def placeholder(self) -> str:
        return self.error.placeholder()


class TranslationResult:
    """Translation result"""
    def __init__(self, sink: LineSink):
        self.sink = sink
        self.skipped: List[SkippedItem] = []
        self.translated_count = 0

    @property
    def lines(self) -> List[str]:
        return self.sink.lines

    @property
    def text(self) -> str:
        return self.sink.getvalue()


class TranslationDriver:
    """
    Translation driver.

    - One TranslationContext per run, link name fixed at construction
    - Items dispatched through ItemTranslator in source order
    - States: READY -> PER_ITEM -> DONE
    """

    def __init__(self, link_name: str = DEFAULT_LINK_NAME, parser: Optional[Parser] = None):
        self.link_name = link_name
        self.parser = parser if parser is not None else Parser()
        self.state = DriverState.READY

    def translate(self, program: Program, sink: Optional[LineSink] = None) -> TranslationResult:
        """Translate a parsed program. Hard translation errors are re-raised."""
        sink = sink if sink is not None else LineSink()
        context = TranslationContext(link_name=self.link_name)
        translator = ItemTranslator(context, sink, self.parser.parse_struct)
        result = TranslationResult(sink)

        self.state = DriverState.PER_ITEM
        try:
            for item in program.items:
                self._translate_item(translator, item, result)
        finally:
            self.state = DriverState.DONE
        return result

    def translate_source(self, source: str, source_file: str = "main.rs",
                         stream: Optional[TextIO] = None) -> TranslationResult:
        """Parse, then translate. Lines are mirrored to stream as they are written."""
        self.state = DriverState.READY
        program = self.parser.parse(source, source_file)
        return self.translate(program, LineSink(stream))

    def _translate_item(self, translator: ItemTranslator, item: Item, result: TranslationResult) -> None:
        logger.debug("translating %s at %s", type(item).__name__, item.location)
        try:
            translator.translate(item)
        except SoftTranslationError as e:
            if e.location is None:
                e.location = item.location
            logger.warning("skipped %s: %s", type(item).__name__, e)
            result.sink.emit(e.placeholder())
            result.skipped.append(SkippedItem(item, e))
            return
        except HardTranslationError as e:
            if e.location is None:
                e.location = item.location
            logger.error("translation aborted: %s", e)
            raise
        result.translated_count += 1
