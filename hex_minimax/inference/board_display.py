import sys

from hex_minimax.enums import Piece, get_piece_unicode_symbol, int_to_piece


def ansi_colored(text, color):
    colors = {
        'blue': '\033[34m',
        'red': '\033[31m',
        'reset': '\033[0m',
    }
    return f"{colors.get(color, '')}{text}{colors['reset']}"


def display_hex_board(board, file=None, highlight_move=None) -> None:
    """
    Display a column-major board as ASCII art, one column per line, with optional move highlighting.
    Shorter columns are indented so a hexagonal board shows its shape.
    Args:
        board: sequence of columns holding 0=empty, 1=player one, 2=player two
        file: file-like object to write to (default: stdout)
        highlight_move: (column, line) tuple to highlight, or None
    """
    highlight_symbol = '*'  # Symbol for highlighted move
    tallest = max(len(column) for column in board)
    lines = []
    header = '    ' + ' '.join(str(i % 10) for i in range(tallest))
    lines.append(header)
    use_color = file is None and sys.stdout.isatty()

    for col_idx, column in enumerate(board):
        indent = ' ' * (tallest - len(column))
        col_str = f"{col_idx:2d}  " + indent
        for line_idx, cell in enumerate(column):
            piece = int_to_piece(cell)
            symbol = get_piece_unicode_symbol(piece)

            if highlight_move is not None and (col_idx, line_idx) == tuple(highlight_move):
                col_str += highlight_symbol + ' '
            else:
                if use_color:
                    if piece == Piece.PLAYER_ONE:
                        symbol = ansi_colored(symbol, 'blue')
                    elif piece == Piece.PLAYER_TWO:
                        symbol = ansi_colored(symbol, 'red')
                col_str += symbol + ' '
        lines.append(col_str.rstrip())

    output = '\n'.join(lines)
    if file is not None:
        print(output, file=file)
    else:
        print(output)
