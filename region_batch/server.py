from __future__ import annotations

import logging
import shlex
from typing import Optional

from region_batch.command import build_criterion, execute_command
from region_batch.config import AppConfig
from region_batch.errors import BatchError
from region_batch.flags import default_registry
from region_batch.identity import IdentityResolver, InMemoryIdentityDirectory
from region_batch.mutation import BatchExecutor
from region_batch.reporting import CollectingSink, report
from region_batch.storage import RegionStore, SQLiteIdentityDirectory, build_region_store
from region_batch.storage.region_store import STORAGE_DIR_NAME

LOG = logging.getLogger("region_batch.server")

try:
    from mcp.server.fastmcp import FastMCP
except ImportError as exc:  # pragma: no cover - dependency is optional at import time
    FastMCP = None
    _IMPORT_ERROR = exc
else:
    _IMPORT_ERROR = None


def _require_server() -> "FastMCP":
    if FastMCP is None:
        raise SystemExit(
            "The mcp package is required to run the server. "
            "Install it with `pip install mcp` or `pip install mcp[fastmcp]`."
        ) from _IMPORT_ERROR
    return FastMCP("region-batch-server")


def _validate_required(name: str, value: Optional[str]) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"Missing required field: {name}")


def _json_payload(model) -> dict:
    return model.model_dump(mode="json")


def _error_payload(error: BatchError) -> dict:
    return {"error": type(error).__name__, "message": str(error)}


def build_backends(config: AppConfig) -> tuple[RegionStore, IdentityResolver]:
    store = build_region_store(config.store.backend, config.store.project_path)
    if config.store.backend == "sqlite":
        db_path = config.store.project_path / STORAGE_DIR_NAME / "regions.db"
        return store, SQLiteIdentityDirectory(db_path)
    return store, InMemoryIdentityDirectory()


class BatchTools:
    """Tool implementations; every method returns a JSON-ready dict."""

    def __init__(self, executor: BatchExecutor, resolver: IdentityResolver, default_world: str) -> None:
        self._executor = executor
        self._resolver = resolver
        self._default_world = default_world

    def _run(
        self,
        world: Optional[str],
        mode: str,
        target: Optional[str],
        flag: str,
        actor: str,
        value: Optional[str],
    ) -> dict:
        try:
            # Flag first: an unknown flag must abort before selection runs.
            definition = self._executor.registry.lookup(flag)
            criterion = build_criterion(mode, shlex.split(target) if target else [])
            identity = self._resolver.resolve(actor)
            result = self._executor.run_batch(world or self._default_world, criterion, definition, identity, value)
        except BatchError as exc:
            LOG.info("Batch aborted: %s", exc)
            return _error_payload(exc)
        sink = CollectingSink()
        report(result, sink)
        payload = _json_payload(result)
        payload["messages"] = sink.lines
        return payload

    def set_flag(
        self,
        mode: str,
        flag: str,
        value: str,
        actor: str,
        target: Optional[str] = None,
        world: Optional[str] = None,
    ) -> dict:
        _validate_required("mode", mode)
        _validate_required("flag", flag)
        _validate_required("actor", actor)
        return self._run(world, mode, target, flag, actor, value)

    def remove_flag(
        self,
        mode: str,
        flag: str,
        actor: str,
        target: Optional[str] = None,
        world: Optional[str] = None,
    ) -> dict:
        _validate_required("mode", mode)
        _validate_required("flag", flag)
        _validate_required("actor", actor)
        return self._run(world, mode, target, flag, actor, None)

    def select_regions(self, mode: str, target: Optional[str] = None, world: Optional[str] = None) -> dict:
        _validate_required("mode", mode)
        try:
            criterion = build_criterion(mode, shlex.split(target) if target else [])
            preview = self._executor.preview(world or self._default_world, criterion)
        except BatchError as exc:
            return _error_payload(exc)
        return _json_payload(preview)

    def run_command(self, command: str, actor: str, world: Optional[str] = None) -> dict:
        _validate_required("command", command)
        _validate_required("actor", actor)
        try:
            identity = self._resolver.resolve(actor)
        except BatchError as exc:
            return _error_payload(exc)
        sink = CollectingSink()
        result = execute_command(self._executor, world or self._default_world, identity, command.split(), sink)
        payload = _json_payload(result) if result is not None else {"error": "aborted"}
        payload["messages"] = sink.lines
        return payload


def build_tools(
    config: AppConfig,
    store: Optional[RegionStore] = None,
    resolver: Optional[IdentityResolver] = None,
) -> BatchTools:
    if store is None or resolver is None:
        store, resolver = build_backends(config)
    executor = BatchExecutor(store, resolver, default_registry())
    return BatchTools(executor, resolver, config.default_world)


def build_server(
    config: Optional[AppConfig] = None,
    store: Optional[RegionStore] = None,
    resolver: Optional[IdentityResolver] = None,
) -> "FastMCP":
    config = config or AppConfig.from_env()
    tools = build_tools(config, store, resolver)
    server = _require_server()

    @server.tool(
            description="Set a flag on every region matched by a selection mode "
            "(all, player, owner, member, regex, count, child)."
    )
    def set_flag_tool(
        mode: str,
        flag: str,
        value: str,
        actor: str,
        target: Optional[str] = None,
        world: Optional[str] = None,
    ) -> dict:
        return tools.set_flag(mode=mode, flag=flag, value=value, actor=actor, target=target, world=world)

    @server.tool(
            description="Remove a flag from every region matched by a selection mode."
    )
    def remove_flag_tool(
        mode: str,
        flag: str,
        actor: str,
        target: Optional[str] = None,
        world: Optional[str] = None,
    ) -> dict:
        return tools.remove_flag(mode=mode, flag=flag, actor=actor, target=target, world=world)

    @server.tool(
            description="List the regions a selection mode would match, without changing anything."
    )
    def select_regions_tool(mode: str, target: Optional[str] = None, world: Optional[str] = None) -> dict:
        return tools.select_regions(mode=mode, target=target, world=world)

    @server.tool(
            description="Run a raw batch command, e.g. 'fset regex shop_[0-9]+ greeting Welcome!'."
    )
    def run_command_tool(command: str, actor: str, world: Optional[str] = None) -> dict:
        return tools.run_command(command=command, actor=actor, world=world)

    return server


def main() -> None:
    config = AppConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    server = build_server(config)
    server.run()


if __name__ == "__main__":
    main()
