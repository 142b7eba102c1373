import pytest

from celframes.errors import (
    DuplicateFrameConflictError,
    MalformedContainerError,
    ResourceFailureError,
    ResourceNotFoundError,
    SparseFrameRangeError,
)
from celframes.kernel.lookup import MemoryLookup
from celframes.level.aggregate import aggregate
from celframes.level.preset import tall


class RecordingLookup:
    def __init__(self, resources):
        self.lookup = MemoryLookup(resources)
        self.requested = []

    def read(self, name):
        self.requested.append(name)
        return self.lookup.read(name)


def test_aggregate_keeps_configured_order(lookup):
    result = aggregate(lookup, ['l4', 'l1', 'l2'])
    assert result.names == ('l4', 'l1', 'l2')
    assert result['l1'].frame_types == (2, 0)
    assert result['l2'].frame_types == (1, 1, 4, 5)
    assert result['l4'].frame_types == (3, 6, 0)
    assert [mapping.resource_name for mapping in result] == ['l4', 'l1', 'l2']


def test_missing_resource_fails_fast(level_data):
    lookup = RecordingLookup(level_data)
    with pytest.raises(ResourceFailureError) as excinfo:
        aggregate(lookup, ['l1', 'missing', 'l2'])
    assert excinfo.value.name == 'missing'
    assert isinstance(excinfo.value.cause, ResourceNotFoundError)
    assert excinfo.value.__cause__ is excinfo.value.cause
    assert lookup.requested == ['l1', 'missing']


@pytest.mark.parametrize(
    ('pieces', 'error'),
    [
        ([[(0, 1), (2, 1)]], SparseFrameRangeError),
        ([[(5, 3)], [(5, 4)]], DuplicateFrameConflictError),
    ],
)
def test_reduction_errors_are_wrapped(make_min, pieces, error):
    lookup = MemoryLookup({'l3': make_min(pieces)})
    with pytest.raises(ResourceFailureError) as excinfo:
        aggregate(lookup, ['l3'])
    assert excinfo.value.name == 'l3'
    assert isinstance(excinfo.value.cause, error)
    assert str(excinfo.value).startswith('l3: ')


def test_malformed_container_is_wrapped(level_data):
    lookup = MemoryLookup({'town': level_data['l1']})
    with pytest.raises(ResourceFailureError) as excinfo:
        aggregate(lookup, ['town'])
    assert isinstance(excinfo.value.cause, MalformedContainerError)


def test_custom_layouts(level_data):
    lookup = MemoryLookup({'hell': level_data['l4']})
    result = aggregate(lookup, ['hell'], layouts={'hell': tall})
    assert result['hell'].frame_types == (3, 6, 0)


def test_fill_holes(make_min):
    lookup = MemoryLookup({'l1': make_min([[(0, 1), (2, 1)]])})
    result = aggregate(lookup, ['l1'], fill_holes=True)
    assert result['l1'].frame_types == (1, 0, 1)


def test_unknown_name_in_result(lookup):
    result = aggregate(lookup, ['l1'])
    with pytest.raises(KeyError):
        result['l2']


@pytest.mark.parametrize('names', [[], ['l1', 'l2', 'l1']])
def test_invalid_names(lookup, names):
    with pytest.raises(ValueError):
        aggregate(lookup, names)


def test_lookup_io_error_is_wrapped(level_data):
    class UnreadableLookup(RecordingLookup):
        def read(self, name):
            super().read(name)
            raise PermissionError(13, 'Permission denied', f'{name}.min')

    lookup = UnreadableLookup(level_data)
    with pytest.raises(ResourceFailureError) as excinfo:
        aggregate(lookup, ['l1', 'l2'])
    assert excinfo.value.name == 'l1'
    assert isinstance(excinfo.value.cause, ResourceNotFoundError)
    assert isinstance(excinfo.value.cause.__cause__, PermissionError)
    assert lookup.requested == ['l1']


def test_custom_layouts_keep_level_defaults(make_min):
    lookup = MemoryLookup({
        'l4': make_min([[(0, 1)]], blocks_per_piece=16),
        'hell': make_min([[(0, 2), (1, 3)]], blocks_per_piece=16),
    })
    result = aggregate(lookup, ['l4', 'hell'], layouts={'hell': tall})
    assert result['l4'].frame_types == (1,)
    assert result['hell'].frame_types == (2, 3)
