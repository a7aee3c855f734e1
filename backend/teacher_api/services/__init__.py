"""Services — authorization checks and query orchestration per teacher-facing resource."""
