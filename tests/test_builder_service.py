"""Tests for response builder envelope construction, forwarding and dispatch."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import pytest

from responder.builder import (
    BuilderConfig,
    InvalidArgumentsError,
    InvalidCodeTypeError,
    LogDirectoryError,
    ResponseBuilder,
    ResponseResult,
    UnknownStatusCodeError,
)
from responder.domain import STATUS_DESCRIPTORS
from responder.sinks import SinkLevel


class _RecordingSink:
    """Test double that records every sink write."""

    def __init__(self) -> None:
        self.writes: list[tuple[dict[str, Any], str]] = []
        self.closed = False

    def sink_write(self, record: dict[str, Any], description: str) -> None:
        """Record one write.

        Args:
            record: Structured payload.
            description: Write description.

        Returns:
            None: This method does not return a value.

        Raises:
            RuntimeError: This test double does not raise runtime errors.
        """

        self.writes.append((record, description))

    def sink_close(self) -> None:
        self.closed = True


class _RecordingSinkFactory:
    """Test double that hands out recording sinks per level."""

    def __init__(self) -> None:
        self.sinks: dict[SinkLevel, _RecordingSink] = {}
        self.contexts: list[str] = []

    def sink_create(self, context: str, level: SinkLevel) -> _RecordingSink:
        """Create and remember one recording sink.

        Args:
            context: Builder context tag.
            level: Sink level.

        Returns:
            _RecordingSink: New recording sink.

        Raises:
            RuntimeError: This test double does not raise runtime errors.
        """

        self.contexts.append(context)
        sink = _RecordingSink()
        self.sinks[level] = sink
        return sink

    def total_writes(self) -> int:
        return sum(len(sink.writes) for sink in self.sinks.values())


_FIXED_NOW = datetime(2026, 2, 14, 9, 30, 5, tzinfo=timezone.utc)


def _build(tmp_path, **config_values) -> tuple[ResponseBuilder, _RecordingSinkFactory]:
    factory = _RecordingSinkFactory()
    config = BuilderConfig(log_path=str(tmp_path / "logs"), **config_values)
    builder = ResponseBuilder(config=config, sink_factory=factory, clock=lambda: _FIXED_NOW)
    return builder, factory


def test_builder_construction_creates_log_directory_and_three_sinks(tmp_path) -> None:
    """Create the log directory and one sink per level at construction.

    Returns:
        None: Assertions validate construction side effects.

    Raises:
        AssertionError: Raised when construction side effects are missing.
    """

    builder, factory = _build(tmp_path, context="orders")

    assert (tmp_path / "logs").is_dir()
    assert set(factory.sinks) == {SinkLevel.INFO, SinkLevel.ERROR, SinkLevel.DEBUG}
    assert factory.contexts == ["orders", "orders", "orders"]

    builder.builder_close()
    assert all(sink.closed for sink in factory.sinks.values())


def test_builder_construction_rejects_unusable_log_directory(tmp_path) -> None:
    """Raise LogDirectoryError when the log path is a regular file.

    Returns:
        None: Assertions validate construction failure.

    Raises:
        AssertionError: Raised when construction succeeds unexpectedly.
    """

    blocked_path = tmp_path / "blocked"
    blocked_path.write_text("not a directory", encoding="utf-8")

    with pytest.raises(LogDirectoryError):
        ResponseBuilder(config=BuilderConfig(log_path=str(blocked_path)), sink_factory=_RecordingSinkFactory())


def test_builder_config_defaults() -> None:
    """Expose documented configuration defaults.

    Returns:
        None: Assertions validate defaults.

    Raises:
        AssertionError: Raised when defaults drift.
    """

    config = BuilderConfig()

    assert config.context == ""
    assert config.log_path == "logs/"
    assert (config.debug, config.log_info, config.log_client_errors, config.log_internal_errors) == (
        False,
        False,
        False,
        True,
    )
    assert dict(config.response_template) == {}


@pytest.mark.parametrize("code", sorted(STATUS_DESCRIPTORS))
def test_builder_make_status_matches_table_entry(tmp_path, code: int) -> None:
    """Attach the exact table descriptor for every known code.

    Returns:
        None: Assertions validate status payload.

    Raises:
        AssertionError: Raised when status payload differs from table.
    """

    builder, _ = _build(tmp_path)

    envelope = builder.make(code, {}).result_unwrap()

    assert envelope["status"] == STATUS_DESCRIPTORS[code].status_payload()
    assert envelope["context"] == ""


def test_builder_make_merge_precedence_context_always_wins(tmp_path) -> None:
    """Let args override template while builder context overrides args.

    Returns:
        None: Assertions validate merge precedence.

    Raises:
        AssertionError: Raised when precedence is incorrect.
    """

    builder, _ = _build(tmp_path, context="builder-ctx", response_template={"foo": 0, "bar": 2})

    envelope = builder.make(200, {"context": "x", "foo": 1}).result_unwrap()

    assert envelope == {
        "status": {"code": 200, "message": "OK"},
        "context": "builder-ctx",
        "foo": 1,
        "bar": 2,
    }


def test_builder_make_args_deep_merge_over_status(tmp_path) -> None:
    """Merge nested args into the status mapping field by field.

    Returns:
        None: Assertions validate nested merge.

    Raises:
        AssertionError: Raised when nested merge replaces status.
    """

    builder, _ = _build(tmp_path)

    envelope = builder.make(404, {"status": {"description": "Order does not exist."}}).result_unwrap()

    assert envelope["status"] == {"code": 404, "message": "Not Found", "description": "Order does not exist."}


def test_builder_make_does_not_mutate_template_between_calls(tmp_path) -> None:
    """Keep template state isolated from returned envelopes.

    Returns:
        None: Assertions validate template isolation.

    Raises:
        AssertionError: Raised when envelopes alias the template.
    """

    template = {"meta": {"tags": ["base"]}}
    builder, _ = _build(tmp_path, response_template=template)

    first = builder.make(200).result_unwrap()
    first["meta"]["tags"].append("mutated")
    second = builder.make(200).result_unwrap()

    assert second["meta"]["tags"] == ["base"]
    assert template == {"meta": {"tags": ["base"]}}


def test_builder_make_is_repeatable(tmp_path) -> None:
    """Produce equal envelopes for identical calls.

    Returns:
        None: Assertions validate idempotence.

    Raises:
        AssertionError: Raised when repeated calls differ.
    """

    builder, _ = _build(tmp_path, context="ctx", response_template={"service": "catalog"})

    assert builder.make(201, {"id": 7}).envelope == builder.make(201, {"id": 7}).envelope


@pytest.mark.parametrize("code", ["200", None, True, [200], {"code": 200}])
def test_builder_make_rejects_non_numeric_codes_without_logging(tmp_path, code: object) -> None:
    """Fail with InvalidCodeTypeError and write nothing.

    Returns:
        None: Assertions validate validation failure.

    Raises:
        AssertionError: Raised when validation or logging behavior is incorrect.
    """

    builder, factory = _build(tmp_path, debug=True, log_info=True, log_client_errors=True)

    result = builder.make(code, {})

    assert isinstance(result.error, InvalidCodeTypeError)
    assert result.envelope is None
    assert factory.total_writes() == 0


@pytest.mark.parametrize("code", [0, 202, 418, 499, 501, 200.5])
def test_builder_make_rejects_unknown_codes_without_logging(tmp_path, code: object) -> None:
    """Fail with UnknownStatusCodeError and write nothing.

    Returns:
        None: Assertions validate validation failure.

    Raises:
        AssertionError: Raised when validation or logging behavior is incorrect.
    """

    builder, factory = _build(tmp_path, debug=True, log_info=True, log_client_errors=True)

    result = builder.make(code, {})

    assert isinstance(result.error, UnknownStatusCodeError)
    assert result.error.status_code == code
    assert factory.total_writes() == 0
    with pytest.raises(UnknownStatusCodeError):
        result.result_unwrap()


def test_builder_make_rejects_non_mapping_args(tmp_path) -> None:
    """Fail with InvalidArgumentsError when args is not a mapping.

    Returns:
        None: Assertions validate argument validation.

    Raises:
        AssertionError: Raised when malformed args are accepted.
    """

    builder, _ = _build(tmp_path)

    result = builder.make(200, ["not", "a", "mapping"])

    assert isinstance(result.error, InvalidArgumentsError)


def test_builder_make_mirrors_result_to_callback(tmp_path) -> None:
    """Invoke callback with `(None, envelope)` and `(error, None)`.

    Returns:
        None: Assertions validate callback delivery.

    Raises:
        AssertionError: Raised when callback delivery differs from result.
    """

    builder, _ = _build(tmp_path)
    calls: list[tuple[object, object]] = []

    success = builder.make(200, {"id": 1}, lambda error, envelope: calls.append((error, envelope)))
    failure = builder.make("bad", {}, lambda error, envelope: calls.append((error, envelope)))

    assert calls[0] == (None, success.envelope)
    assert calls[1][0] is failure.error
    assert calls[1][1] is None


@pytest.mark.parametrize(
    ("code", "flag", "level", "description"),
    [
        (200, "log_info", SinkLevel.INFO, "Response"),
        (404, "log_client_errors", SinkLevel.INFO, "Client error response"),
        (503, "log_internal_errors", SinkLevel.ERROR, "Internal error response"),
    ],
)
def test_builder_make_severity_tier_gating(tmp_path, code: int, flag: str, level: SinkLevel, description: str) -> None:
    """Write to the tier sink only when the tier flag is enabled.

    Returns:
        None: Assertions validate tier gating.

    Raises:
        AssertionError: Raised when tier gating is incorrect.
    """

    disabled_builder, disabled_factory = _build(tmp_path, **{flag: False})
    disabled_builder.make(code, {})
    assert disabled_factory.total_writes() == 0

    enabled_builder, enabled_factory = _build(tmp_path, **{flag: True})
    envelope = enabled_builder.make(code, {}).result_unwrap()
    assert enabled_factory.sinks[level].writes == [({"response": envelope}, description)]
    assert enabled_factory.total_writes() == 1


def test_builder_make_internal_errors_logged_by_default(tmp_path) -> None:
    """Log server errors with default configuration only.

    Returns:
        None: Assertions validate default gating.

    Raises:
        AssertionError: Raised when defaults do not log server errors.
    """

    builder, factory = _build(tmp_path)

    builder.make(200)
    builder.make(404)
    builder.make(500)

    assert len(factory.sinks[SinkLevel.ERROR].writes) == 1
    assert factory.total_writes() == 1


def test_builder_make_debug_mirrors_every_envelope(tmp_path) -> None:
    """Write every envelope to the debug sink regardless of tier flags.

    Returns:
        None: Assertions validate debug mirroring.

    Raises:
        AssertionError: Raised when debug mirroring is incomplete.
    """

    builder, factory = _build(tmp_path, debug=True, log_internal_errors=False)

    for code in (200, 404, 500):
        builder.make(code)

    debug_codes = [record["response"]["status"]["code"] for record, _ in factory.sinks[SinkLevel.DEBUG].writes]
    assert debug_codes == [200, 404, 500]
    assert factory.sinks[SinkLevel.ERROR].writes == []
    assert factory.sinks[SinkLevel.INFO].writes == []


def test_builder_forward_redacts_server_error_detail_and_builds_http_summary(tmp_path) -> None:
    """Strip `error` for server errors and replace `status` with `http$`.

    Returns:
        None: Assertions validate forwarded shape.

    Raises:
        AssertionError: Raised when forwarded shape is incorrect.
    """

    builder, factory = _build(tmp_path, context="gateway")
    message = builder.make(500, {"error": "db connection refused", "request_id": "r-9"}).result_unwrap()

    forwarded = builder.forward(message).result_unwrap()

    assert "error" not in forwarded
    assert "status" not in forwarded
    assert forwarded["request_id"] == "r-9"
    assert forwarded["context"] == "gateway"
    assert forwarded["http$"] == {
        "status": 500,
        "headers": {"date": "Sat, 14 Feb 2026 09:30:05 GMT", "content-type": "application/json"},
    }
    logged_response = factory.sinks[SinkLevel.ERROR].writes[-1][0]["response"]
    assert logged_response["error"] == "db connection refused"
    assert message["error"] == "db connection refused"


def test_builder_forward_keeps_client_error_detail(tmp_path) -> None:
    """Retain `error` below the server-error tier.

    Returns:
        None: Assertions validate client error retention.

    Raises:
        AssertionError: Raised when client error detail is stripped.
    """

    builder, _ = _build(tmp_path)
    message = builder.make(400, {"error": "missing field: name"}).result_unwrap()

    forwarded = builder.forward(message).result_unwrap()

    assert forwarded["error"] == "missing field: name"
    assert forwarded["http$"]["status"] == 400


def test_builder_forward_merge_precedence(tmp_path) -> None:
    """Apply template, message, args then context.

    Returns:
        None: Assertions validate forward precedence.

    Raises:
        AssertionError: Raised when forward precedence is incorrect.
    """

    builder, _ = _build(tmp_path, context="relay", response_template={"version": 1, "region": "eu"})
    message = {"status": {"code": 200, "message": "OK"}, "version": 2, "context": "upstream"}

    forwarded = builder.forward(message, {"region": "us", "context": "caller"}).result_unwrap()

    assert forwarded["version"] == 2
    assert forwarded["region"] == "us"
    assert forwarded["context"] == "relay"


def test_builder_forward_args_can_change_status_code(tmp_path) -> None:
    """Use the merged status code for dispatch, redaction and summary.

    Returns:
        None: Assertions validate merged status handling.

    Raises:
        AssertionError: Raised when the pre-merge status is used.
    """

    builder, factory = _build(tmp_path)
    message = {"status": {"code": 200, "message": "OK"}, "error": "upstream timeout"}

    forwarded = builder.forward(message, {"status": {"code": 503}}).result_unwrap()

    assert forwarded["http$"]["status"] == 503
    assert "error" not in forwarded
    assert len(factory.sinks[SinkLevel.ERROR].writes) == 1


@pytest.mark.parametrize(
    ("message", "error_type"),
    [
        ({"payload": 1}, InvalidCodeTypeError),
        ({"status": "OK"}, InvalidCodeTypeError),
        ({"status": {"code": "200"}}, InvalidCodeTypeError),
        ({"status": {"code": 299}}, UnknownStatusCodeError),
        (["status"], InvalidArgumentsError),
    ],
)
def test_builder_forward_rejects_invalid_messages_without_logging(
    tmp_path,
    message: object,
    error_type: type[Exception],
) -> None:
    """Fail validation before any sink write.

    Returns:
        None: Assertions validate forward validation.

    Raises:
        AssertionError: Raised when invalid messages are forwarded.
    """

    builder, factory = _build(tmp_path, debug=True)
    calls: list[tuple[object, object]] = []

    result = builder.forward(message, None, lambda error, envelope: calls.append((error, envelope)))

    assert isinstance(result.error, error_type)
    assert calls == [(result.error, None)]
    assert factory.total_writes() == 0


def test_builder_result_requires_exactly_one_outcome() -> None:
    """Reject results carrying both or neither outcome.

    Returns:
        None: Assertions validate result contract.

    Raises:
        AssertionError: Raised when malformed results are accepted.
    """

    with pytest.raises(ValueError):
        ResponseResult()
    with pytest.raises(ValueError):
        ResponseResult(envelope={}, error=InvalidCodeTypeError())


@pytest.mark.parametrize(
    ("args", "error_type"),
    [
        ({"status": {"code": 999}}, UnknownStatusCodeError),
        ({"status": {"code": "500"}}, InvalidCodeTypeError),
        ({"status": "x"}, InvalidCodeTypeError),
    ],
)
def test_builder_make_rejects_args_overriding_status_outside_table(
    tmp_path,
    args: dict[str, Any],
    error_type: type[Exception],
) -> None:
    """Validate the merged status so args cannot emit codes outside the table.

    Returns:
        None: Assertions validate merged status validation.

    Raises:
        AssertionError: Raised when an out-of-table status is emitted.
    """

    builder, factory = _build(tmp_path, debug=True, log_info=True)

    result = builder.make(200, args)

    assert isinstance(result.error, error_type)
    assert result.envelope is None
    assert factory.total_writes() == 0


def test_builder_make_dispatches_on_merged_status_code(tmp_path) -> None:
    """Route to the tier of the status code carried by the returned envelope.

    Returns:
        None: Assertions validate tier routing from the merged status.

    Raises:
        AssertionError: Raised when the requested code drives routing instead.
    """

    builder, factory = _build(tmp_path, log_info=True)

    envelope = builder.make(200, {"status": {"code": 500}}).result_unwrap()

    assert envelope["status"]["code"] == 500
    assert factory.sinks[SinkLevel.ERROR].writes == [({"response": envelope}, "Internal error response")]
    assert factory.sinks[SinkLevel.INFO].writes == []


class _FailingSinkFactory:
    """Test double whose sinks cannot be opened after the first level."""

    def __init__(self) -> None:
        self.created: list[_RecordingSink] = []

    def sink_create(self, context: str, level: SinkLevel) -> _RecordingSink:
        if self.created:
            raise FileNotFoundError(f"cannot open sink for {context!r} at {level.value}")
        sink = _RecordingSink()
        self.created.append(sink)
        return sink


def test_builder_construction_wraps_sink_open_failures(tmp_path) -> None:
    """Raise LogDirectoryError and close opened sinks when a sink fails to open.

    Returns:
        None: Assertions validate construction failure contract.

    Raises:
        AssertionError: Raised when a bare OSError escapes construction.
    """

    factory = _FailingSinkFactory()

    with pytest.raises(LogDirectoryError):
        ResponseBuilder(config=BuilderConfig(log_path=str(tmp_path / "logs")), sink_factory=factory)

    assert factory.created[0].closed
