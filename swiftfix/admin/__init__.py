from swiftfix.admin.dashboard import STATUS_ACTIONS, AdminDashboard, AdminLockedError

__all__ = ["AdminDashboard", "AdminLockedError", "STATUS_ACTIONS"]
