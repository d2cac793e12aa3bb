"""Pure parsers from git's text output to typed results.

Parsers have no side effects and never raise on malformed-but-present input;
unknown lines are skipped and empty input yields an empty result.
"""

from vcs_gateway.git_cli.parsers.blame import parse_blame
from vcs_gateway.git_cli.parsers.diff import (
    has_binary_changes,
    parse_change_summary,
    parse_name_only,
    parse_nul_separated,
    parse_numstat,
)
from vcs_gateway.git_cli.parsers.log import parse_log, parse_reflog, parse_stash_list
from vcs_gateway.git_cli.parsers.refs import parse_branch_list, parse_remote_list, parse_tag_list
from vcs_gateway.git_cli.parsers.status import parse_conflicted_files, parse_status
from vcs_gateway.git_cli.parsers.transfer import (
    has_conflict_markers,
    is_fast_forward,
    is_up_to_date,
    parse_conflict_paths,
    parse_fetch_updates,
    parse_push_porcelain,
)
from vcs_gateway.git_cli.parsers.working_tree import (
    parse_add_verbose,
    parse_clean,
    parse_commit_header,
    parse_reset_unstaged,
)
from vcs_gateway.git_cli.parsers.worktree import parse_worktree_list

__all__ = [
    "has_binary_changes",
    "has_conflict_markers",
    "is_fast_forward",
    "is_up_to_date",
    "parse_add_verbose",
    "parse_blame",
    "parse_branch_list",
    "parse_change_summary",
    "parse_clean",
    "parse_commit_header",
    "parse_conflict_paths",
    "parse_conflicted_files",
    "parse_fetch_updates",
    "parse_log",
    "parse_name_only",
    "parse_nul_separated",
    "parse_numstat",
    "parse_push_porcelain",
    "parse_reflog",
    "parse_remote_list",
    "parse_reset_unstaged",
    "parse_stash_list",
    "parse_status",
    "parse_tag_list",
    "parse_worktree_list",
]
