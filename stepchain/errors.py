"""
Error taxonomy for pipeline runs
Every error here is fatal to the run that raised it
"""


class PipelineError(Exception):
    """Base class for errors raised while executing a pipeline"""

    def __init__(self, message: str, step: str | None = None):
        super().__init__(message)
        self.step = step


class ValueNotFoundError(PipelineError):
    """No values of the requested type exist in the store"""


class InvalidIndexError(PipelineError):
    """A negative index was requested from the store"""


class IndexOutOfRangeError(PipelineError):
    """An explicit binding index lies outside the available values"""


class TypeMismatchError(PipelineError):
    """A bound value is not assignable to the declared parameter type"""


class MissingArgumentError(PipelineError):
    """Policy is 'fail' and a parameter needs default resolution"""


class UnknownProducerError(PipelineError):
    """A function_output binding names a step with no recorded outputs"""


class UnknownPolicyError(PipelineError):
    """The configured missing-argument policy is not recognized"""


class StepExecutionError(PipelineError):
    """The step body raised, or returned an unexpected number of values"""
