from .gym_env import HnefataflEnv

__all__ = ["HnefataflEnv"]
