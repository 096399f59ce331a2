"""Console output formatting utilities for monodeps."""

from __future__ import annotations

import json
import sys
from typing import Optional, TextIO

from ..model import DependencyGraph, graph_to_dict


class Console:
    """Centralized console output formatting."""
    
    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.
        
        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug
    
    def print_graph(
        self,
        graph: DependencyGraph,
        indent: int = 2,
        stream: Optional[TextIO] = None,
    ) -> None:
        """
        Print the raw dependency graph as JSON.
        
        Args:
            graph: Sorted dependency graph
            indent: JSON indentation
            stream: Target stream (defaults to stdout)
        """
        text = json.dumps(graph_to_dict(graph), indent=indent, ensure_ascii=False)
        print(text, file=stream or sys.stdout)
    
    def print_projects(self, names: list[str]) -> None:
        """Print one project name per line."""
        for name in names:
            print(name)
    
    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.
        
        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)
    
    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__)
        else:
            print(f"Error: {exc}", file=sys.stderr)
    
    def print_info(self, message: str) -> None:
        """Print informational message (stderr, stdout carries the graph)."""
        print(message, file=sys.stderr)
    
    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
