import os

import numpy as np

ArrayBuffer = bytes | memoryview


def map_file(file_path: str | os.PathLike[str]) -> memoryview:
    """Map a resource file read-only; the view keeps the map alive."""
    with open(file_path, 'rb') as f:
        # np.memmap cannot map an empty file
        if not os.fstat(f.fileno()).st_size:
            return memoryview(b'')
        return memoryview(np.memmap(f, dtype='u1', mode='r'))
