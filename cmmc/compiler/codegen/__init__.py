from .generator import CodeGen as CodeGen
from .functions import frame_size as frame_size
