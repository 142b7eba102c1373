from collections.abc import Sequence


class CelFramesError(Exception):
    pass


class ResourceNotFoundError(CelFramesError):
    def __init__(self, name: str, location: str | None = None) -> None:
        where = f' at {location}' if location else ''
        super().__init__(f'resource not found: {name}{where}')
        self.name = name
        self.location = location


class MalformedContainerError(CelFramesError):
    def __init__(self, reason: str, offset: int | None = None) -> None:
        where = f' (offset 0x{offset:04X})' if offset is not None else ''
        super().__init__(f'malformed MIN container: {reason}{where}')
        self.reason = reason
        self.offset = offset


class DuplicateFrameConflictError(CelFramesError):
    def __init__(self, frame_num: int, first: int, second: int) -> None:
        super().__init__(
            f'frame {frame_num} declared with conflicting types {first} and {second}'
        )
        self.frame_num = frame_num
        self.first = first
        self.second = second


class SparseFrameRangeError(CelFramesError):
    def __init__(self, missing: Sequence[int], max_frame_num: int) -> None:
        shown = ', '.join(str(num) for num in missing[:8])
        more = f', ... ({len(missing)} total)' if len(missing) > 8 else ''
        super().__init__(
            f'no frame type for frame numbers {shown}{more} below {max_frame_num}'
        )
        self.missing = tuple(missing)
        self.max_frame_num = max_frame_num


class ResourceFailureError(CelFramesError):
    def __init__(self, name: str, cause: CelFramesError) -> None:
        super().__init__(f'{name}: {cause}')
        self.name = name
        self.cause = cause
