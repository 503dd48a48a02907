from upload_pipeline.logging.logger import Log
from upload_pipeline.uploads.aliases import AliasResolver
from upload_pipeline.uploads.filesystem import copy_file, create_directory, remove_directory
from upload_pipeline.uploads.handlers import HandlerExecutor
from upload_pipeline.uploads.paths import resolve_directory
from upload_pipeline.uploads.pipeline import PipelineStage, StepContext


class ResolveDirectoryStage(PipelineStage):
    def __init__(self, aliases: AliasResolver) -> None:
        self._aliases = aliases

    def run(self, context: StepContext) -> StepContext:
        context.directory = resolve_directory(
            context.step.path, context.attributes, self._aliases
        )
        return context


class PrepareDirectoryStage(PipelineStage):
    def __init__(self, clean_dir_on_update: bool = False) -> None:
        self._clean_dir_on_update = clean_dir_on_update

    def run(self, context: StepContext) -> StepContext:
        if not context.is_new_record and self._clean_dir_on_update:
            remove_directory(context.directory)
            Log.info("Cleaned upload directory", directory=context.directory)
        create_directory(context.directory)
        return context


class WriteOutputStage(PipelineStage):
    def __init__(self, executor: HandlerExecutor) -> None:
        self._executor = executor

    def run(self, context: StepContext) -> StepContext:
        tmp_file = context.uploaded_file.temp_name
        if context.step.handler is not None:
            self._executor.execute(
                context.step.handler, tmp_file, context.directory, context.file_name
            )
        else:
            copy_file(tmp_file, f"{context.directory}{context.file_name}")
        Log.info(
            "Stored upload",
            directory=context.directory,
            file=context.file_name,
        )
        return context
