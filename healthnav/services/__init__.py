"""Services package: recommendation, booking and session management."""
