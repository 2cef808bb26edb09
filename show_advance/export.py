"""Generate/print action: rename the surface, print, restore the title later."""
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Optional

from .filename import derive_file_name, path_component
from .render_pdf import write_advance_pdf
from .types import FormRecord, RenderOptions

DEFAULT_SETTLE_DELAY = 0.15


@dataclass
class DocumentSurface:
    """Whatever carries the title the print dialog picks up."""
    title: str = "Show Advance"


class ExportAction:
    """
    Three steps: compute the file name, set it as the surface title and
    invoke the print primitive, then restore the previous title after a
    fixed settle delay. The restore is fire-and-forget.
    """

    def __init__(self, printer: Callable[[str], object], surface: Optional[DocumentSurface] = None,
                 settle_delay: float = DEFAULT_SETTLE_DELAY,
                 timer_factory: Callable = threading.Timer):
        self.printer = printer
        self.surface = surface or DocumentSurface()
        self.settle_delay = settle_delay
        self.timer_factory = timer_factory

    def run(self, record) -> str:
        if not isinstance(record, FormRecord):
            record = FormRecord.from_mapping(record)
        file_name = derive_file_name(record.get("eventName"), record.get("eventDate"))

        previous_title = self.surface.title
        self.surface.title = file_name
        print(f"[EXPORT] Printing as {file_name}", flush=True)
        self.printer(file_name)

        def restore():
            self.surface.title = previous_title

        timer = self.timer_factory(self.settle_delay, restore)
        if hasattr(timer, "daemon"):
            timer.daemon = True
        timer.start()
        return file_name


@dataclass
class PdfFilePrinter:
    """Print primitive for headless use: writes <output_dir>/<title>.pdf."""
    output_dir: Path
    record: FormRecord
    contacts: Optional[Iterable] = None
    options: Optional[RenderOptions] = None
    written: list = field(default_factory=list)

    def __call__(self, title: str) -> Path:
        path = write_advance_pdf(Path(self.output_dir) / f"{path_component(title)}.pdf", self.record,
                                 self.contacts, self.options)
        self.written.append(path)
        return path
