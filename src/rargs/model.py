# src/rargs/model.py
import os
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from rargs.core.utils.line_reader import NEWLINE, NUL


class RargsOptions(BaseModel):
    """The validated command-line options of one rargs run."""
    read0: bool = Field(default=False, description="Input records are delimited by NUL instead of newline.")
    worker: int = Field(default=1, ge=0, description="Deprecated alias for threads.")
    threads: int = Field(default=1, ge=0, description="Number of worker threads; 0 picks a default.")
    pattern: Optional[str] = Field(default=None, description="Regex capturing the fields of each line.")
    separator: str = Field(default=" ", description="Separator for joined range fields.")
    startnum: int = Field(default=1, description="Line number given to the first input line.")
    delimiter: Optional[str] = Field(default=None, description="Regex splitting each line into fields.")
    dry_run: bool = Field(default=False, description="Print the commands instead of running them.")
    progress: bool = Field(default=False, description="Show a progress bar on stderr.")
    cmd_and_args: List[str] = Field(min_length=1, description="The command to run and its argument templates.")

    @model_validator(mode="after")
    def _pattern_xor_delimiter(self) -> "RargsOptions":
        if self.pattern is not None and self.delimiter is not None:
            raise ValueError("--pattern and --delimiter cannot be used together")
        return self

    @property
    def line_delimiter(self) -> bytes:
        return NUL if self.read0 else NEWLINE

    @property
    def num_threads(self) -> int:
        """Threads, falling back to the deprecated worker count, then the CPU count."""
        num_worker = self.worker if self.worker > 0 else (os.cpu_count() or 1)
        return self.threads if self.threads > 0 else num_worker
