from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from upload_pipeline.uploads.models import StepConfig, UploadedFile
from upload_pipeline.uploads.pipeline import PipelineStage, StepContext


class StepRunner:
    """Applies the stage chain to every configured step, in order.

    The first error aborts the remaining steps; outputs already written by
    earlier steps stay on disk.
    """

    def __init__(self, stages: Sequence[PipelineStage]) -> None:
        self._stages = list(stages)

    def run(
        self,
        steps: Iterable[StepConfig],
        uploaded_file: UploadedFile,
        file_name: str,
        attributes: Mapping[str, Any],
        is_new_record: bool,
    ) -> list[str]:
        """Return the directories written, in step order."""
        directories: list[str] = []
        for step in steps:
            context = StepContext(
                step=step,
                uploaded_file=uploaded_file,
                file_name=file_name,
                attributes=attributes,
                is_new_record=is_new_record,
            )
            for stage in self._stages:
                context = stage.run(context)
            directories.append(context.directory)
        return directories
