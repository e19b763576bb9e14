class PerceptionError(Exception):
    pass


class EmptyInputError(PerceptionError, ValueError):
    # Statistic requested over an empty point group.
    pass


class MissingInputError(PerceptionError):
    pass


class DegenerateGeometryError(PerceptionError):
    # e.g. a zero-width mouth contour.
    pass


class InferenceError(PerceptionError):
    # A model collaborator could not load or run.
    pass


class ImageLoadError(PerceptionError):
    pass
