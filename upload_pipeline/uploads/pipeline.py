from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from upload_pipeline.uploads.models import StepConfig, UploadedFile


@dataclass(slots=True)
class StepContext:
    step: StepConfig
    uploaded_file: UploadedFile
    file_name: str
    attributes: Mapping[str, Any]
    is_new_record: bool
    directory: str = ""


class PipelineStage(ABC):
    @abstractmethod
    def run(self, context: StepContext) -> StepContext:
        raise NotImplementedError
