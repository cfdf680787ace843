"""优化编排器。"""

from token_saver.optimizer.engine import (
    Optimizer,
    get_default_optimizer,
    optimize,
    reset_default_optimizer,
)

__all__ = ["Optimizer", "get_default_optimizer", "optimize", "reset_default_optimizer"]
