"""Discord notifier for the Yonsei Mirae campus notice board."""
