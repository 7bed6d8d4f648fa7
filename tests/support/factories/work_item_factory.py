"""Pipeline data factories for test data generation."""

from pathlib import Path

from thumbnailer.schemas.pipeline import PipelineConfig, WorkItem


def create_pipeline_config(base_dir: Path, **overrides) -> PipelineConfig:
    """Create a PipelineConfig rooted under ``base_dir``.

    Args:
        base_dir: Temporary directory (usually pytest's tmp_path)
        **overrides: Field values replacing the defaults

    Returns:
        PipelineConfig with 2 workers and a 100x100 target.
    """
    values = {
        "parallelism": 2,
        "target_width": 100,
        "target_height": 100,
        "working_directory": base_dir / "images",
        "output_directory": base_dir / "resized_images",
    }
    values.update(overrides)
    return PipelineConfig(**values)


def create_work_item(
    working_directory: Path,
    url: str = "http://images.test/a.png",
    name: str = "x.jpg",
) -> WorkItem:
    """Create a single WorkItem."""
    return WorkItem(source_url=url, destination_name=name, working_directory=working_directory)


def create_work_items(
    working_directory: Path,
    count: int,
    host: str = "images.test",
) -> list[WorkItem]:
    """Create ``count`` WorkItems with distinct URLs and names."""
    return [
        create_work_item(
            working_directory,
            url=f"http://{host}/img-{index}.png",
            name=f"test-{index:06d}.jpg",
        )
        for index in range(1, count + 1)
    ]
