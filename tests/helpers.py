def play(board, *plays):
    """Apply (mark, column) pairs in order."""
    for mark, column in plays:
        board.apply_play(mark, column)
    return board
