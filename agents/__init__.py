"""
Quoridor agents: state evaluation, minimax search and a random fallback.
"""
