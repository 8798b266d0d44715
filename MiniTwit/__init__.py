"""MiniTwit: a small microblogging JSON API with command-checkpoint tracking."""
