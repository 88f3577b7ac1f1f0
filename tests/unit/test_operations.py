"""
Unit tests for trace_tree.operations status, formatter and pipeline support.
"""
import logging
import pytest

from trace_tree.core.types import TimestampType, TraceType
from trace_tree.formatters import (
    ELAPSED_TIMESTAMP_FORMATTER,
    REAL_TIMESTAMP_FORMATTER,
    offset_real_timestamp_formatter,
)
from trace_tree.operations import (
    AddDuration,
    AddStatus,
    Operation,
    OperationPipeline,
    SetFormatters,
    operations_for,
    resolve_path,
)
from trace_tree.tree import PropertySource, PropertyTreeBuilder, PropertyTreeNode


def make_tree(wm_data=None, shell_data=None):
    children = []
    if wm_data is not None:
        children.append({'name': 'wmData', 'children': [{'name': k, 'value': v} for k, v in wm_data.items()]})
    if shell_data is not None:
        children.append({'name': 'shellData', 'children': [{'name': k, 'value': v} for k, v in shell_data.items()]})
    return PropertyTreeBuilder('TransitionsTraceEntry', 'transition', children=children).build()


class TestResolvePath:
    """Tests for path resolution."""
    
    def test_resolves_nested_path(self):
        tree = make_tree(wm_data={'sendTimeNs': 10})
        assert resolve_path(tree, ('wmData', 'sendTimeNs')).value == 10
    
    def test_empty_path_is_tree(self):
        tree = make_tree()
        assert resolve_path(tree, ()) is tree
    
    def test_missing_step(self):
        tree = make_tree(wm_data={'sendTimeNs': 10})
        assert resolve_path(tree, ('shellData', 'dispatchTimeNs')) is None
        assert resolve_path(tree, ('wmData', 'sendTimeNs', 'deeper')) is None


class TestAddStatus:
    """Tests for the AddStatus operation."""
    
    @pytest.mark.parametrize("wm_data,shell_data,expected", [
        ({'abortTimeNs': 5, 'finishTimeNs': 9}, {'mergeTimeNs': 7}, 'ABORTED'),
        ({'finishTimeNs': 9}, {'mergeTimeNs': 7}, 'MERGED'),
        ({'finishTimeNs': 9}, None, 'PLAYED'),
        (None, {'dispatchTimeNs': 3}, 'PLAYED'),
    ])
    def test_status(self, wm_data, shell_data, expected):
        tree = AddStatus().apply(make_tree(wm_data, shell_data))
        status = tree.get_child_by_name('status')
        assert status.value == expected
        assert status.source is PropertySource.CALCULATED
    
    def test_no_lifecycle_timestamps(self):
        tree = AddStatus().apply(make_tree(wm_data={'sendTimeNs': 1}))
        assert tree == make_tree(wm_data={'sendTimeNs': 1})
    
    def test_idempotent(self):
        operation = AddStatus()
        tree = operation.apply(operation.apply(make_tree(wm_data={'finishTimeNs': 9})))
        assert [c.name for c in tree.get_all_children()] == ['wmData', 'status']
    
    def test_raw_status_is_kept_and_reported(self, caplog):
        tree = make_tree(wm_data={'finishTimeNs': 9})
        tree.add_child(PropertyTreeNode(id=f"{tree.id}.status", name='status', value='FINISHED'))
        
        with caplog.at_level(logging.WARNING, logger="trace_tree.operations.add_status"):
            status = AddStatus().apply(tree).get_child_by_name('status')
        
        assert status.value == 'FINISHED'
        assert status.source is PropertySource.RAW
        assert "raw 'status' property" in caplog.text


class TestSetFormatters:
    """Tests for the SetFormatters operation."""
    
    def test_sets_elapsed_formatter_on_time_fields(self):
        tree = SetFormatters().apply(make_tree(wm_data={'sendTimeNs': 850746266486, 'id': 3}))
        wm_data = tree.get_child_by_name('wmData')
        assert wm_data.get_child_by_name('sendTimeNs').formatted_value() == '14m10s746ms266486ns'
        assert wm_data.get_child_by_name('sendTimeNs').source is PropertySource.RAW
        assert wm_data.get_child_by_name('id').formatter is None
    
    def test_keeps_existing_formatter(self):
        tree = PropertyTreeBuilder('TransitionsTraceEntry', 'transition', children=[
            {'name': 'wallTimeNs', 'value': 0, 'formatter': REAL_TIMESTAMP_FORMATTER},
        ]).build()
        SetFormatters().apply(tree)
        assert tree.get_child_by_name('wallTimeNs').formatter is REAL_TIMESTAMP_FORMATTER
    
    def test_custom_suffixes(self):
        tree = make_tree(wm_data={'startNs': 5})
        SetFormatters({'Ns': ELAPSED_TIMESTAMP_FORMATTER}).apply(tree)
        assert tree.get_child_by_name('wmData').get_child_by_name('startNs').formatted_value() == '5ns'


class Recorder(Operation):
    def __init__(self, log, name):
        self.log = log
        self.name = name
    
    def apply(self, tree):
        self.log.append(self.name)
        return tree


class TestOperationPipeline:
    """Tests for ordered operation execution."""
    
    def test_runs_in_order(self):
        log = []
        pipeline = OperationPipeline([Recorder(log, 'first'), Recorder(log, 'second')])
        pipeline.apply(make_tree())
        assert log == ['first', 'second']
    
    def test_later_operations_see_calculated_nodes(self):
        class DoubleDuration(Operation):
            def apply(self, tree):
                duration = tree.get_child_by_name('duration')
                if duration is not None:
                    duration.value *= 2
                return tree
        
        pipeline = OperationPipeline([AddDuration(), DoubleDuration()])
        tree = pipeline.apply(make_tree(wm_data={'sendTimeNs': 10, 'finishTimeNs': 30}))
        assert tree.get_child_by_name('duration').value == 40
    
    def test_empty_pipeline(self):
        tree = make_tree(wm_data={'sendTimeNs': 10})
        assert OperationPipeline().apply(tree) is tree
    
    def test_operation_is_abstract(self):
        with pytest.raises(TypeError):
            Operation()


class TestOperationsFor:
    """Tests for per-trace-type wiring."""
    
    def test_transitions_pipeline(self):
        pipeline = operations_for(TraceType.TRANSITION)
        tree = pipeline.apply(make_tree(wm_data={'sendTimeNs': 10, 'finishTimeNs': 30}))
        assert tree.get_child_by_name('duration').value == 20
        assert tree.get_child_by_name('status').value == 'PLAYED'
        assert tree.get_child_by_name('wmData').get_child_by_name('sendTimeNs').formatted_value() == '10ns'
    
    def test_protolog_pipeline_is_empty(self):
        assert len(operations_for(TraceType.PROTO_LOG)) == 0
    
    def test_fresh_pipeline_per_call(self):
        assert operations_for(TraceType.TRANSITION) is not operations_for(TraceType.TRANSITION)
    
    def test_real_domain_formats_time_fields_as_wall_clock(self):
        pipeline = operations_for(TraceType.TRANSITION, TimestampType.REAL, 1_000_000_000)
        tree = pipeline.apply(make_tree(wm_data={'sendTimeNs': 10, 'finishTimeNs': 30}))
        
        send = tree.get_child_by_name('wmData').get_child_by_name('sendTimeNs')
        assert send.value == 10
        assert send.formatted_value() == '1970-01-01T00:00:01.000000010'
        assert tree.get_child_by_name('duration').formatted_value() == '20ns'
    
    def test_real_domain_without_offset_keeps_elapsed_formatting(self):
        pipeline = operations_for(TraceType.TRANSITION, TimestampType.REAL)
        tree = pipeline.apply(make_tree(wm_data={'sendTimeNs': 10}))
        assert tree.get_child_by_name('wmData').get_child_by_name('sendTimeNs').formatter is ELAPSED_TIMESTAMP_FORMATTER


class TestOffsetRealTimestampFormatter:
    """Tests for wall-clock rendering of elapsed fields."""
    
    def test_shifts_by_offset(self):
        formatter = offset_real_timestamp_formatter(1655726274631000000)
        assert formatter(110) == '2022-06-20T11:57:54.631000110'
        assert formatter.name == 'real-timestamp+1655726274631000000'
    
    @pytest.mark.parametrize("value", [None, "110", True, 1.5])
    def test_non_integer_values_are_unknown(self, value):
        assert offset_real_timestamp_formatter(0)(value) == 'unknown'
