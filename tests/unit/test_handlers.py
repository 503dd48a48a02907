from pathlib import Path
from unittest.mock import MagicMock, call

import pytest

from upload_pipeline.imaging.base import BaseImageProcessor
from upload_pipeline.uploads.exceptions import ConfigurationError
from upload_pipeline.uploads.handlers import HandlerExecutor
from upload_pipeline.uploads.models import CustomHandler, ImagePolicy, Size


def _make_executor() -> tuple[HandlerExecutor, MagicMock]:
    processor = MagicMock(spec=BaseImageProcessor)
    return HandlerExecutor(processor, thumbnail_prefix="thumb-", original_prefix="original-"), processor


class TestCustomHandler:
    def test_called_with_tmp_destination_and_folder(self) -> None:
        executor, processor = _make_executor()
        func = MagicMock()

        executor.execute(CustomHandler(func), "/tmp/php1", "/srv/big/", "a.jpg")

        func.assert_called_once_with("/tmp/php1", "/srv/big/a.jpg", "/srv/big/")
        processor.resize.assert_not_called()


class TestImagePolicy:
    def test_resize_only(self) -> None:
        executor, processor = _make_executor()
        policy = ImagePolicy(size=Size(400, 400), quality=80)

        executor.execute(policy, "/tmp/php1", "/srv/img/", "a.jpg")

        processor.resize.assert_called_once_with("/tmp/php1", "/srv/img/a.jpg", Size(400, 400), 80)
        processor.thumbnail.assert_not_called()

    def test_thumbnail_uses_prefix_and_own_quality(self) -> None:
        executor, processor = _make_executor()
        policy = ImagePolicy(
            size=Size(400, 400), quality=80, thumbnail_size=Size(100, 100), thumbnail_quality=70
        )

        executor.execute(policy, "/tmp/php1", "/srv/img/", "a.jpg")

        processor.thumbnail.assert_called_once_with(
            "/tmp/php1", "/srv/img/thumb-a.jpg", Size(100, 100), 70
        )

    def test_thumbnail_quality_falls_back_to_quality(self) -> None:
        executor, processor = _make_executor()
        policy = ImagePolicy(size=Size(400, 400), quality=80, thumbnail_size=Size(100, 100))

        executor.execute(policy, "/tmp/php1", "/srv/img/", "a.jpg")

        assert processor.thumbnail.call_args.args[3] == 80

    def test_saves_original_copy(self, tmp_path: Path) -> None:
        executor, _processor = _make_executor()
        source = tmp_path / "php1"
        source.write_bytes(b"raw image bytes")
        folder = f"{tmp_path}/out/"
        Path(folder).mkdir()
        policy = ImagePolicy(size=Size(10, 10), quality=80, save_original=True)

        executor.execute(policy, str(source), folder, "a.jpg")

        assert (tmp_path / "out" / "original-a.jpg").read_bytes() == b"raw image bytes"

    def test_outputs_in_order(self, tmp_path: Path) -> None:
        processor = MagicMock(spec=BaseImageProcessor)
        executor = HandlerExecutor(processor)
        source = tmp_path / "php1"
        source.write_bytes(b"x")
        policy = ImagePolicy(
            size=Size(10, 10), quality=80, thumbnail_size=Size(5, 5), save_original=True
        )

        executor.execute(policy, str(source), f"{tmp_path}/", "a.jpg")

        assert processor.mock_calls == [
            call.resize(str(source), f"{tmp_path}/a.jpg", Size(10, 10), 80),
            call.thumbnail(str(source), f"{tmp_path}/thumb-a.jpg", Size(5, 5), 80),
        ]
        assert (tmp_path / "original-a.jpg").exists()


class TestUnsupportedHandler:
    def test_raises_without_writing(self) -> None:
        executor, processor = _make_executor()

        with pytest.raises(ConfigurationError, match="Handler must be"):
            executor.execute({"size": (1, 1)}, "/tmp/php1", "/srv/", "a.jpg")  # type: ignore[arg-type]

        processor.resize.assert_not_called()
        processor.thumbnail.assert_not_called()
