"""
Pytest configuration and shared fixtures for trace tree tests.
"""
import json
import pytest


@pytest.fixture
def viewer_config():
    """ProtoLog viewer config resolving the hashes used by protolog_trace."""
    return {
        "version": "1.0.0",
        "messages": {
            "1417226425": {
                "message": "InsetsSource updateVisibility for %s, serverVisible: %b clientVisible: %b",
                "level": "DEBUG",
                "group": "WM_DEBUG_IME",
                "at": "com/android/server/wm/InsetsSourceProvider.java"
            },
            "-1066383762": {
                "message": "Transition %d: took %fms, %d%% of frames dropped",
                "level": "VERBOSE",
                "group": "WM_DEBUG_WINDOW_TRANSITIONS",
                "at": "com/android/server/wm/Transition.java"
            }
        },
        "groups": {
            "WM_DEBUG_IME": {"tag": "WindowManager"},
            "WM_DEBUG_WINDOW_TRANSITIONS": {"tag": "WindowManager"}
        }
    }


@pytest.fixture
def protolog_trace():
    """ProtoLog capture in its JSON encoding, without an embedded viewer config."""
    return {
        "magicNumber": "5138409603453637200",
        "realTimeToElapsedTimeOffsetMillis": "1655726274631",
        "log": [
            {
                "messageHash": 1417226425,
                "elapsedRealtimeNanos": "850746266486",
                "strParams": ["ITYPE_IME"],
                "booleanParams": [False, False]
            },
            {
                "messageHash": -1066383762,
                "elapsedRealtimeNanos": "850746336718",
                "sint64Params": ["42", "7"],
                "doubleParams": [16.5]
            },
            {
                "messageHash": 99,
                "elapsedRealtimeNanos": "850746350430",
                "strParams": ["orphan"]
            }
        ]
    }


@pytest.fixture
def transitions_trace():
    """Transitions capture: played, aborted and merged transitions plus one without timestamps."""
    return {
        "realToElapsedTimeOffsetNanos": "1655726274631000000",
        "transitions": [
            {
                "id": 1,
                "type": "OPEN",
                "wmData": {
                    "createTimeNs": "100",
                    "sendTimeNs": "110",
                    "finishTimeNs": "130",
                    "targets": [{"mode": 1, "layerId": "5"}]
                },
                "shellData": {
                    "dispatchTimeNs": "115",
                    "handler": "DefaultTransitionHandler"
                }
            },
            {
                "id": 2,
                "type": "CLOSE",
                "wmData": {
                    "createTimeNs": "200",
                    "sendTimeNs": "210",
                    "abortTimeNs": "250"
                }
            },
            {
                "id": 3,
                "type": "TO_FRONT",
                "wmData": {
                    "createTimeNs": "300",
                    "sendTimeNs": "320",
                    "finishTimeNs": "310"
                },
                "shellData": {
                    "dispatchTimeNs": "322",
                    "mergeTimeNs": "330"
                }
            },
            {
                "id": 4,
                "type": "CHANGE"
            }
        ]
    }


@pytest.fixture
def temp_json_file(tmp_path):
    """Create a temporary JSON file and return a helper function."""
    def _create_file(data, name=None):
        file_path = tmp_path / (name or f"test_{id(data)}.json")
        with open(file_path, "w") as f:
            json.dump(data, f)
        return str(file_path)

    return _create_file

