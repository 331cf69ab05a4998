"""REST API for OT Tracker."""
