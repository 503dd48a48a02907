from collections.abc import Iterable
from pathlib import Path
from typing import Any

from upload_pipeline.config.settings import Settings
from upload_pipeline.database.models import Record
from upload_pipeline.imaging.base import BaseImageProcessor
from upload_pipeline.imaging.factory import ImageProcessorFactory
from upload_pipeline.logging.logger import Log
from upload_pipeline.uploads.aliases import AliasResolver
from upload_pipeline.uploads.filesystem import remove_directory
from upload_pipeline.uploads.handlers import HandlerExecutor
from upload_pipeline.uploads.models import UploadConfig, UploadedFile
from upload_pipeline.uploads.naming import generate_file_name
from upload_pipeline.uploads.paths import resolve_directory
from upload_pipeline.uploads.runner import StepRunner
from upload_pipeline.uploads.stages import (
    PrepareDirectoryStage,
    ResolveDirectoryStage,
    WriteOutputStage,
)


class UploadBehavior:
    """Stores a record's uploaded file at the points its persistence code calls.

    Lifecycle: ``before_save`` (insert and update) names the file and writes
    the name into the storage attribute; ``after_insert`` / ``after_update``
    run every configured step; ``after_delete`` optionally removes the step
    directories.
    """

    def __init__(
        self,
        config: UploadConfig,
        runner: StepRunner,
        aliases: AliasResolver,
    ) -> None:
        self._config = config
        self._runner = runner
        self._aliases = aliases

    @property
    def config(self) -> UploadConfig:
        return self._config

    def uploaded_file(self, record: Record) -> UploadedFile | None:
        value = record.attributes.get(self._config.file_attribute)
        return value if isinstance(value, UploadedFile) else None

    def is_file_present(self, record: Record) -> bool:
        uploaded = self.uploaded_file(record)
        return uploaded is not None and bool(uploaded.temp_name)

    def is_scenario_allowed(self, record: Record) -> bool:
        return record.scenario in self._config.scenarios

    def should_process(self, record: Record) -> bool:
        return self.is_file_present(record) and self.is_scenario_allowed(record)

    def before_save(self, record: Record) -> None:
        if not self.should_process(record):
            Log.debug("No upload to prepare", record_id=record.id, scenario=record.scenario)
            return
        self._assign_file_name(record, self.uploaded_file(record))

    def after_insert(self, record: Record) -> None:
        self.process_upload(record, is_new_record=True)

    def after_update(self, record: Record) -> None:
        self.process_upload(record, is_new_record=False)

    def process_upload(self, record: Record, is_new_record: bool) -> list[str]:
        """Run every step for the record's upload and return the directories written."""
        if not self.should_process(record):
            Log.debug("Upload skipped", record_id=record.id, scenario=record.scenario)
            return []

        uploaded = self.uploaded_file(record)
        file_name = record.attributes.get(self._config.storage_attribute)
        if not file_name:
            file_name = self._assign_file_name(record, uploaded)
        else:
            Log.debug("Reusing stored file name", record_id=record.id, file=file_name)

        directories = self._runner.run(
            self._config.steps,
            uploaded_file=uploaded,
            file_name=file_name,
            attributes=record.attributes,
            is_new_record=is_new_record,
        )
        Log.info(
            "Upload processed",
            record_id=record.id,
            file=file_name,
            steps=len(directories),
        )
        return directories

    def after_delete(self, record: Record) -> None:
        if not self._config.delete_files_with_record:
            return

        for step in self._config.steps:
            directory = resolve_directory(step.path, record.attributes, self._aliases)
            if not directory.rstrip("/"):
                Log.warning("Refusing to remove root directory", record_id=record.id)
                continue
            if not Path(directory).is_dir():
                continue
            remove_directory(directory)
            Log.info("Removed upload directory", record_id=record.id, directory=directory)

    def _assign_file_name(self, record: Record, uploaded: UploadedFile) -> str:
        file_name = generate_file_name(uploaded, self._config.new_file_name)
        record.attributes[self._config.storage_attribute] = file_name
        return file_name


def build_upload_behavior(
    settings: Settings,
    steps: Iterable[Any],
    image_processor: BaseImageProcessor | None = None,
    **options: Any,
) -> UploadBehavior:
    """Build an UploadBehavior whose defaults come from settings.

    ``options`` override any UploadConfig field (e.g. ``storage_attribute``).
    """
    config_options: dict[str, Any] = {
        "thumbnail_prefix": settings.thumbnail_prefix,
        "original_prefix": settings.original_prefix,
        "scenarios": frozenset(settings.upload_scenarios),
        "delete_files_with_record": settings.delete_files_with_record,
        "clean_dir_on_update": settings.clean_dir_on_update,
    }
    config_options.update(options)
    config = UploadConfig.from_steps(steps, **config_options)

    aliases = AliasResolver({"@files": settings.files_root, **settings.path_aliases})
    if image_processor is None:
        image_processor = ImageProcessorFactory.create(settings)
    executor = HandlerExecutor(
        image_processor,
        thumbnail_prefix=config.thumbnail_prefix,
        original_prefix=config.original_prefix,
    )
    runner = StepRunner(
        [
            ResolveDirectoryStage(aliases),
            PrepareDirectoryStage(config.clean_dir_on_update),
            WriteOutputStage(executor),
        ]
    )
    return UploadBehavior(config, runner, aliases)
