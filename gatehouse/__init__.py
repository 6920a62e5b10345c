"""Gatehouse: token lifecycle and per-project access control with an audit trail."""
