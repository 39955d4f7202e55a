import pytest
from loguru import logger

from dashdock.layout.area import Orientation, SplitArea, TabArea, WidgetRef


@pytest.fixture
def serializer():
    """Host serializer that stores the payload as-is."""
    return lambda widget: widget.payload


@pytest.fixture
def deserializer():
    """Host deserializer that hands the configuration back as the payload."""
    return lambda configuration: configuration


@pytest.fixture
def log_messages():
    """Collect loguru messages at WARNING and above."""
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def widgets():
    return {
        name: WidgetRef(name, {"kind": "chart", "name": name})
        for name in ("A", "B", "C", "D")
    }


@pytest.fixture
def sample_tree(widgets):
    """
    horizontal split
    ├── tab area [A, B] (current B)
    └── vertical split
        ├── tab area [C]
        └── tab area [D]
    """
    return SplitArea(
        orientation=Orientation.HORIZONTAL,
        children=[
            TabArea(widgets=[widgets["A"], widgets["B"]], current_index=1),
            SplitArea(
                orientation=Orientation.VERTICAL,
                children=[TabArea(widgets=[widgets["C"]]), TabArea(widgets=[widgets["D"]])],
                sizes=[2.0, 1.0],
            ),
        ],
        sizes=[1.0, 3.0],
    )
