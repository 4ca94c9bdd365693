import uuid
import pytest

from taskboard.domain.enums import TaskStatus
from taskboard.domain.task_id import TaskId
from taskboard.errors import InvalidArgumentError


def test_generate_yields_canonical_uuid4():
    tid = TaskId.generate()
    parsed = uuid.UUID(tid.value)
    assert parsed.version == 4
    assert str(parsed) == tid.value
    assert str(tid) == tid.value


def test_generated_ids_are_unique():
    assert len({TaskId.generate().value for _ in range(50)}) == 50


def test_from_string_accepts_canonical_form_and_lowercases():
    raw = "3F2504E0-4F89-41D3-9A0C-0305E82C3301"
    tid = TaskId.from_string(raw)
    assert tid.value == raw.lower()
    assert tid == TaskId.from_string(raw.lower())


@pytest.mark.parametrize("raw", [
    "",
    "not-a-uuid",
    "3f2504e04f8941d39a0c0305e82c3301",
    "{3f2504e0-4f89-41d3-9a0c-0305e82c3301}",
    "urn:uuid:3f2504e0-4f89-41d3-9a0c-0305e82c3301",
    "3f2504e0-4f89-41d3-9a0c-0305e82c3301\n",
    "3f2504e0-4f89-41d3-9a0c-0305e82c330g",
])
def test_from_string_rejects_non_canonical(raw):
    with pytest.raises(InvalidArgumentError) as exc:
        TaskId.from_string(raw)
    assert exc.value.code == "INVALID_ARGUMENT"


def test_direct_construction_is_validated_too():
    with pytest.raises(InvalidArgumentError):
        TaskId("bogus")


def test_task_id_is_immutable():
    tid = TaskId.generate()
    with pytest.raises(Exception):
        tid.value = "x"  # type: ignore[misc]


@pytest.mark.parametrize("raw,expected", [
    ("todo", TaskStatus.TODO),
    ("in_progress", TaskStatus.IN_PROGRESS),
    ("done", TaskStatus.DONE),
])
def test_status_from_string(raw, expected):
    assert TaskStatus.from_string(raw) is expected


@pytest.mark.parametrize("raw", ["", "DONE", "in-progress", "pending", " todo"])
def test_status_from_string_rejects_unknown(raw):
    with pytest.raises(InvalidArgumentError):
        TaskStatus.from_string(raw)
