# Data factories for test data generation

from tests.support.factories.http_factory import Routes, mock_fetchers
from tests.support.factories.image_factory import (
    create_gradient_image,
    create_image_bytes,
    create_test_image,
    encode_image,
    image_format,
    image_size,
    save_test_image,
)
from tests.support.factories.work_item_factory import (
    create_pipeline_config,
    create_work_item,
    create_work_items,
)

__all__ = [
    # Image factories
    "create_gradient_image",
    "create_image_bytes",
    "create_test_image",
    "encode_image",
    "image_format",
    "image_size",
    "save_test_image",
    # Pipeline factories
    "create_pipeline_config",
    "create_work_item",
    "create_work_items",
    # HTTP factories
    "Routes",
    "mock_fetchers",
]
