"""Actions that edit and evaluate the Ex-style command line."""

from __future__ import annotations

from functools import partial
from typing import Callable, Dict, List

from vimcore.modes.base_mode import EditorMode, ModeContext, ModeResult
from vimcore.runtime import telemetry

CommandHandler = Callable[[ModeContext, List[str]], ModeResult]


def submit_command_line(context: ModeContext, match) -> ModeResult:
    del match
    session = context.session
    text = session.command_text.strip()
    session.command_text = ""
    context.bus.emit("command.submit", text)
    if not text:
        return ModeResult(consumed=True, switch_to=EditorMode.NORMAL, status="command_empty")
    command, *args = text.split()
    handler = _COMMAND_HANDLERS.get(command)
    if handler is None:
        return _command_error(context, command, f"Not an editor command: {command}")
    return handler(context, args)


def command_backspace(context: ModeContext, match) -> ModeResult:
    del match
    session = context.session
    if not session.command_text:
        return ModeResult(consumed=True, switch_to=EditorMode.NORMAL, message="command_cancel")
    session.command_text = session.command_text[:-1]
    return ModeResult(consumed=True, status="editing")


def _command_error(context: ModeContext, command: str, message: str) -> ModeResult:
    telemetry.record_event(
        "command.error", level="warning", data={"command": command, "reason": message}
    )
    context.bus.emit("command.error", {"command": command, "message": message})
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status="command_error",
        message=message,
    )


def _write(context: ModeContext, args: List[str], command: str) -> ModeResult | None:
    """Save the buffer; returns an error result when there is nowhere to save."""

    session = context.session
    path = args[0] if args else session.path
    if not path:
        return _command_error(context, command, "no file name")
    written = session.save(path)
    context.bus.emit("command.write", {"path": str(written), "lines": session.buffer.len()})
    return None


def _handle_write(
    context: ModeContext, args: List[str], *, force: bool = False
) -> ModeResult:
    error = _write(context, args, "write!" if force else "write")
    if error is not None:
        return error
    session = context.session
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status="command_write",
        message=f'"{session.path}" {session.buffer.len()}L written',
    )


def _handle_quit(
    context: ModeContext, args: List[str], *, force: bool = False
) -> ModeResult:
    del args
    context.bus.emit("command.quit", {"force": force})
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.EXIT,
        status="command_quit_force" if force else "command_quit",
    )


def _handle_write_quit(
    context: ModeContext, args: List[str], *, force: bool = False
) -> ModeResult:
    error = _write(context, args, "wq!" if force else "wq")
    if error is not None:
        return error
    return _handle_quit(context, [], force=force)


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "write": _handle_write,
    "w": _handle_write,
    "write!": partial(_handle_write, force=True),
    "w!": partial(_handle_write, force=True),
    "quit": _handle_quit,
    "q": _handle_quit,
    "quit!": partial(_handle_quit, force=True),
    "q!": partial(_handle_quit, force=True),
    "wq": _handle_write_quit,
    "wq!": partial(_handle_write_quit, force=True),
    "x": _handle_write_quit,
    "x!": partial(_handle_write_quit, force=True),
    "exit": _handle_write_quit,
}


__all__ = ["command_backspace", "submit_command_line"]
