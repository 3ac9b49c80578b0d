"""
Output - Console output formatting.

Provides colored progress lines and the release summary.
"""

import sys
from typing import Optional, TextIO

from ..application.release import CheckResult, ReleaseResult


class Colors:
    """ANSI color codes."""
    
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"
    
    BG_YELLOW = "\033[43m"


class Symbols:
    """Unicode symbols for output."""
    
    CHECK = "✓"
    CROSS = "✗"
    ARROW = "→"
    DOT = "•"
    WARN = "⚠"
    INFO = "ℹ"
    GEAR = "⚙"
    BOX_H = "─"


class Console:
    """Console output helper with colors and formatting."""
    
    def __init__(
        self,
        color: bool = True,
        verbose: bool = False,
        stream: Optional[TextIO] = None,
    ):
        self.stream = stream or sys.stdout
        self.color = color and hasattr(self.stream, "isatty") and self.stream.isatty()
        self.verbose = verbose
    
    def _c(self, text: str, *codes: str) -> str:
        """Apply color codes to text."""
        if not self.color:
            return text
        return "".join(codes) + text + Colors.RESET
    
    def print(self, text: str = "") -> None:
        """Print text."""
        print(text, file=self.stream)
    
    def header(self, text: str) -> None:
        """Print a header."""
        width = max(len(text) + 4, 50)
        border = self._c(Symbols.BOX_H * width, Colors.CYAN) if self.color else "-" * width
        
        self.print()
        self.print(border)
        self.print(self._c(f"  {text}", Colors.BOLD, Colors.CYAN))
        self.print(border)
        self.print()
    
    def section(self, text: str) -> None:
        """Print a section header."""
        self.print()
        self.print(self._c(f"{Symbols.ARROW} {text}", Colors.BOLD, Colors.BLUE))
    
    def success(self, text: str) -> None:
        """Print success message."""
        self.print(self._c(f"  {Symbols.CHECK} {text}", Colors.GREEN))
    
    def error(self, text: str) -> None:
        """Print error message."""
        self.print(self._c(f"  {Symbols.CROSS} {text}", Colors.RED))
    
    def warning(self, text: str) -> None:
        """Print warning message."""
        self.print(self._c(f"  {Symbols.WARN} {text}", Colors.YELLOW))
    
    def info(self, text: str) -> None:
        """Print info message."""
        self.print(self._c(f"  {Symbols.INFO} {text}", Colors.CYAN))
    
    def detail(self, text: str) -> None:
        """Print detail text (dimmed)."""
        self.print(self._c(f"    {text}", Colors.DIM))
    
    def debug(self, text: str) -> None:
        """Print debug message (only in verbose mode)."""
        if self.verbose:
            self.print(self._c(f"  [DEBUG] {text}", Colors.DIM))
    
    def progress_line(self, text: str) -> None:
        """Print a progress line reported by the orchestrator."""
        self.print(f"  {Symbols.DOT} JIRA: {text}")
    
    def dry_run_banner(self) -> None:
        """Print dry-run mode banner."""
        self.print()
        banner = f"  {Symbols.GEAR} DRY-RUN MODE - No versions will be changed"
        if self.color:
            self.print(f"{Colors.BG_YELLOW}{Colors.BOLD}{banner}{Colors.RESET}")
        else:
            self.print(f"*** {banner} ***")
        self.print()
    
    def check_result(self, label: str, result: CheckResult) -> None:
        """Print the outcome of an endpoint check."""
        if result.ok:
            self.success(f"{label}: {result.message or 'OK'}")
        else:
            self.error(f"{label}: {result.message}")
    
    def release_result(self, result: ReleaseResult) -> None:
        """Print release result summary."""
        self.section("Release Summary")
        self.print()
        
        if result.dry_run:
            self.info("Mode: DRY-RUN (no changes made)")
        else:
            self.info("Mode: LIVE EXECUTION")
        
        self.detail(f"Project: {result.project_key}")
        self.detail(f"Build: {result.build_number}")
        if result.released_version:
            self.detail(f"Released: {result.released_version}")
        if result.created_version:
            self.detail(f"Created: {result.created_version}")
        
        if result.warnings:
            self.print()
            self.warning(f"{len(result.warnings)} warning(s):")
            for w in result.warnings:
                self.detail(w)
        
        self.print()
        if result.success:
            self.success("Release completed successfully!")
        elif not result.matched:
            self.warning(f"No version matching build {result.build_number} found")
        else:
            self.error("Release did not complete")
