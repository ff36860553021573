"""Shared fixtures: the six-component reference tree.

    PROJECT 1
    └── MODULE 12
        └── MODULE 123
            └── DIRECTORY 1234
                ├── FILE 12341
                └── FILE 12342
"""

import pytest

from quality_measures.core.component import ComponentTreeBuilder, ComponentType
from quality_measures.core.measure import MeasureStore
from quality_measures.core.metric import default_catalog

ROOT_REF = 1
MODULE_REF = 12
SUB_MODULE_REF = 123
DIRECTORY_REF = 1234
FILE_1_REF = 12341
FILE_2_REF = 12342


@pytest.fixture
def component_tree():
    """Reference project tree with two files under one directory."""
    return (
        ComponentTreeBuilder()
        .add(ROOT_REF, ComponentType.PROJECT, children=[MODULE_REF])
        .add(MODULE_REF, ComponentType.MODULE, children=[SUB_MODULE_REF])
        .add(SUB_MODULE_REF, ComponentType.MODULE, children=[DIRECTORY_REF])
        .add(DIRECTORY_REF, ComponentType.DIRECTORY, children=[FILE_1_REF, FILE_2_REF])
        .add(FILE_1_REF, ComponentType.FILE)
        .add(FILE_2_REF, ComponentType.FILE)
        .build()
    )


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def store(component_tree):
    return MeasureStore(component_tree)


@pytest.fixture
def snapshot_data():
    """Snapshot document for the reference tree with file-level measures."""
    return {
        "tree": {
            "ref": ROOT_REF,
            "type": "PROJECT",
            "key": "org.acme:shop",
            "children": [
                {
                    "ref": MODULE_REF,
                    "type": "MODULE",
                    "children": [
                        {
                            "ref": SUB_MODULE_REF,
                            "type": "MODULE",
                            "children": [
                                {
                                    "ref": DIRECTORY_REF,
                                    "type": "DIRECTORY",
                                    "children": [
                                        {"ref": FILE_1_REF, "type": "FILE"},
                                        {"ref": FILE_2_REF, "type": "FILE"},
                                    ],
                                }
                            ],
                        }
                    ],
                }
            ],
        },
        "measures": {
            FILE_1_REF: {"public_api": 100, "public_undocumented_api": 50},
            FILE_2_REF: {"public_api": 400, "public_undocumented_api": 100},
        },
    }
