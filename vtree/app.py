# app.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
import sys
import traceback
import wx

from vtree.core.log import Log
from vtree.core.source import NestedTreeSource
from vtree.core.storage import count_nodes, load_tree_file
from vtree.ui.config import TreeConfig
from vtree.ui.flat_tree import FlatTree
from vtree.ui.row import row_label

def on_exception(exc_type, exc_value, exc_traceback):
    """Show unhandled exceptions on the status bar instead of failing silently."""
    if issubclass(exc_type, KeyboardInterrupt):
        # Allow Ctrl+C to work normally
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return

    tb_text = ''.join(traceback.format_exception(exc_type, exc_value, exc_traceback))
    error_message = f"!ERROR! Unhandled Exception:\n{tb_text}"
    Log.debug(error_message, 0)

    app = wx.GetApp()
    main_frame = app.GetTopWindow() if app else None
    if main_frame is not None and hasattr(main_frame, 'SetStatusText'):
        main_frame.SetStatusText(error_message.splitlines()[-1])
    else:
        print(error_message, file=sys.stderr)

if tuple(getattr(wx, 'VERSION', (0,0,0))[:3]) < (4, 2, 3):
    raise RuntimeError(f"VTree requires wxPython ≥ 4.2.3; found {wx.__version__}")

from vtree.ui.view import TreeView


class MainFrame(wx.Frame):
    """Top-level window hosting one TreeView over a JSON tree file."""

    def __init__(self, path: str, verbosity: int = 0, open_all: bool = False):
        super().__init__(None, title=f"VTree - {path}", size=(600, 700))
        Log.set_verbosity(verbosity)

        roots = load_tree_file(path)
        config = TreeConfig(
            on_row_double_click=self._on_row_double_click,
            no_rows_renderer=lambda: "(empty tree)",
        )
        self.tree = FlatTree(NestedTreeSource(roots), config)
        self.view = TreeView(self, self.tree)
        self.tree.add_order_listener(self._on_order_changed)

        self.CreateStatusBar()
        self.SetStatusText(f"{count_nodes(roots)} nodes")
        self.tree.mount()
        if open_all:
            self.tree.expand_all()

    def _on_order_changed(self, order):
        self.SetStatusText(f"{len(order)} visible rows")

    def _on_row_double_click(self, event, node_data):
        self.SetStatusText(row_label(node_data))


def main(path: str, verbosity: int = 0, stdexp: bool = False, open_all: bool = False):
    # Install the exception handler
    if not stdexp:
        sys.excepthook = on_exception

    app = wx.App(False)

    frame = MainFrame(path, verbosity=verbosity, open_all=open_all)
    frame.Show()

    return app.MainLoop()
