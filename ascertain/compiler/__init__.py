"""Schema compiler: code generation, registry and runtime helpers."""

from .codegen import CodeGenerator, Mode, compile_procedure
from .context import Context
