"""
Git integration for automatic syncing.
"""
from .git_hook import HOOK_SCRIPT, HookInstaller, detect_remote_url, is_git_repo

__all__ = ["HOOK_SCRIPT", "HookInstaller", "detect_remote_url", "is_git_repo"]
