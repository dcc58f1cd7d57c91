# mainwindow.py
from PyQt5.QtWidgets import (
    QMainWindow, QStatusBar, QAction, QMessageBox, QDockWidget, QWidget,
    QVBoxLayout, QPushButton, QLabel, QGroupBox, QShortcut, QInputDialog, QLineEdit
)
from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QKeySequence
import logging

from graph import Graph
from graphwidget import GraphWidget
from isomorphism import IsomorphismChecker

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    isomorphismFinished = pyqtSignal(object)

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Graf - Graph Editor")

        self.graphWidget = GraphWidget(self)
        self.setCentralWidget(self.graphWidget)
        self.setStatusBar(QStatusBar(self))

        self.snapshot: Graph = None
        self.checker = IsomorphismChecker()

        self.createActions()
        self.createMenuBar()
        self.createControlsDock()
        self.createShortcuts()

        self.graphWidget.statusMessage.connect(self.statusBar().showMessage)
        self.graphWidget.selectionTextChanged.connect(self.onSelectionTextChanged)
        # Futures complete on a worker thread; hop back to the GUI thread
        self.isomorphismFinished.connect(self.onIsomorphismFinished, Qt.QueuedConnection)

    def createActions(self):
        self.newAction = QAction("&New Graph", self, triggered=self.confirmNewGraph)
        self.addVertexAction = QAction("&Add Vertex...", self, triggered=self.promptAddVertex)
        self.removeVertexAction = QAction("&Remove Selected Vertex", self, triggered=self.graphWidget.removeSelectedVertex)
        self.relayoutAction = QAction("Re-&layout (Spiral)", self, triggered=self.graphWidget.relayout)
        self.graphInfoAction = QAction("&Graph Info", self, triggered=self.showGraphInfo)

        self.snapshotAction = QAction("&Snapshot Graph", self, triggered=self.takeSnapshot)
        self.isomorphicAction = QAction("&Check Isomorphism vs Snapshot", self, triggered=self.checkIsomorphism)

        self.zoomInAction = QAction("Zoom &In", self, triggered=self.graphWidget.zoomIn)
        self.zoomOutAction = QAction("Zoom &Out", self, triggered=self.graphWidget.zoomOut)
        self.fitAction = QAction("&Fit Graph", self, triggered=self.graphWidget.fitGraph)
        self.centerAction = QAction("&Center on Selection", self, triggered=self.graphWidget.centerSelection)
        self.curvyAction = QAction("C&urved Edges", self, checkable=True)
        self.curvyAction.toggled.connect(self.graphWidget.setCurvedEdges)

        self.aboutAction = QAction("&About", self, triggered=self.showAbout)

    def createMenuBar(self):
        menuBar = self.menuBar()

        fileMenu = menuBar.addMenu("&File")
        fileMenu.addAction(self.newAction)

        editMenu = menuBar.addMenu("&Edit")
        editMenu.addAction(self.addVertexAction)
        editMenu.addAction(self.removeVertexAction)
        editMenu.addSeparator()
        editMenu.addAction(self.relayoutAction)
        editMenu.addSeparator()
        editMenu.addAction(self.graphInfoAction)

        toolsMenu = menuBar.addMenu("&Tools")
        toolsMenu.addAction(self.snapshotAction)
        toolsMenu.addAction(self.isomorphicAction)

        viewMenu = menuBar.addMenu("&View")
        viewMenu.addAction(self.zoomInAction)
        viewMenu.addAction(self.zoomOutAction)
        viewMenu.addAction(self.fitAction)
        viewMenu.addAction(self.centerAction)
        viewMenu.addAction(self.curvyAction)
        aboutMenu = menuBar.addMenu("&About")
        aboutMenu.addAction(self.aboutAction)

    def createControlsDock(self):
        dock = QDockWidget("Controls", self)
        dock.setAllowedAreas(Qt.RightDockWidgetArea)

        mainControlsWidget = QWidget()
        mainLayout = QVBoxLayout(mainControlsWidget)
        mainLayout.setAlignment(Qt.AlignTop)

        editGroup = QGroupBox("Edit")
        editLayout = QVBoxLayout()
        btn_new = QPushButton("New Graph (N)")
        btn_add = QPushButton("Add Vertex (A)")
        btn_remove = QPushButton("Remove Selected (Del)")
        btn_relayout = QPushButton("Re-layout (L)")
        btn_info = QPushButton("Graph Info (I)")
        editLayout.addWidget(btn_new)
        editLayout.addWidget(btn_add)
        editLayout.addWidget(btn_remove)
        editLayout.addWidget(btn_relayout)
        editLayout.addWidget(btn_info)
        editGroup.setLayout(editLayout)

        labelGroup = QGroupBox("Selected Vertex")
        labelLayout = QVBoxLayout()
        self.labelEdit = QLineEdit()
        self.labelEdit.setPlaceholderText("Click a vertex to rename it")
        self.labelEdit.setEnabled(False)
        self.labelEdit.textEdited.connect(self.graphWidget.setSelectedText)
        labelLayout.addWidget(self.labelEdit)
        labelGroup.setLayout(labelLayout)

        isoGroup = QGroupBox("Isomorphism")
        isoLayout = QVBoxLayout()
        btn_snapshot = QPushButton("Snapshot Graph (S)")
        btn_iso = QPushButton("Compare with Snapshot (K)")
        self.snapshotLabel = QLabel("No snapshot.")
        isoLayout.addWidget(btn_snapshot)
        isoLayout.addWidget(btn_iso)
        isoLayout.addWidget(self.snapshotLabel)
        isoGroup.setLayout(isoLayout)

        viewGroup = QGroupBox("View")
        viewLayout = QVBoxLayout()
        btn_fit = QPushButton("Fit Graph (F)")
        btn_zoom_in = QPushButton("Zoom In (+)")
        btn_zoom_out = QPushButton("Zoom Out (-)")
        viewLayout.addWidget(btn_fit)
        viewLayout.addWidget(btn_zoom_in)
        viewLayout.addWidget(btn_zoom_out)
        viewGroup.setLayout(viewLayout)

        helpLabel = QLabel(
            "Drag empty space to pan, wheel to zoom.\n"
            "Drag a vertex to move it; drop it on another to join them.\n"
            "Shift+drag from a vertex to grow a new one."
        )
        helpLabel.setWordWrap(True)

        mainLayout.addWidget(editGroup)
        mainLayout.addWidget(labelGroup)
        mainLayout.addWidget(isoGroup)
        mainLayout.addWidget(viewGroup)
        mainLayout.addSpacing(15)
        mainLayout.addWidget(helpLabel)

        dock.setWidget(mainControlsWidget)
        self.addDockWidget(Qt.RightDockWidgetArea, dock)

        btn_new.clicked.connect(self.newAction.trigger)
        btn_add.clicked.connect(self.addVertexAction.trigger)
        btn_remove.clicked.connect(self.removeVertexAction.trigger)
        btn_relayout.clicked.connect(self.relayoutAction.trigger)
        btn_info.clicked.connect(self.graphInfoAction.trigger)
        btn_snapshot.clicked.connect(self.snapshotAction.trigger)
        btn_iso.clicked.connect(self.isomorphicAction.trigger)
        btn_fit.clicked.connect(self.fitAction.trigger)
        btn_zoom_in.clicked.connect(self.zoomInAction.trigger)
        btn_zoom_out.clicked.connect(self.zoomOutAction.trigger)

    def createShortcuts(self):
        QShortcut(QKeySequence("N"), self, self.newAction.trigger)
        QShortcut(QKeySequence("A"), self, self.addVertexAction.trigger)
        QShortcut(QKeySequence(Qt.Key_Delete), self, self.removeVertexAction.trigger)
        QShortcut(QKeySequence("L"), self, self.relayoutAction.trigger)
        QShortcut(QKeySequence("I"), self, self.graphInfoAction.trigger)
        QShortcut(QKeySequence("S"), self, self.snapshotAction.trigger)
        QShortcut(QKeySequence("K"), self, self.isomorphicAction.trigger)
        QShortcut(QKeySequence("F"), self, self.fitAction.trigger)
        QShortcut(QKeySequence("C"), self, self.centerAction.trigger)
        QShortcut(QKeySequence(Qt.Key_Plus), self, self.zoomInAction.trigger)
        QShortcut(QKeySequence(Qt.Key_Equal), self, self.zoomInAction.trigger)
        QShortcut(QKeySequence(Qt.Key_Minus), self, self.zoomOutAction.trigger)
        QShortcut(QKeySequence("F1"), self, self.aboutAction.trigger)

    # --------------------------
    # Graph editing
    # --------------------------
    def confirmNewGraph(self):
        if self.graphWidget.graph.vertexCount() > 0:
            reply = QMessageBox.question(
                self, "Confirm Reset",
                "This will discard the current graph. Are you sure?",
                QMessageBox.Yes | QMessageBox.No, QMessageBox.No
            )
            if reply != QMessageBox.Yes:
                return
        self.graphWidget.newGraph()

    def promptAddVertex(self):
        label, ok = QInputDialog.getText(self, "Add Vertex", "Label:")
        if ok:
            self.graphWidget.addVertex(label)

    def onSelectionTextChanged(self, text):
        self.labelEdit.setEnabled(text is not None)
        shown = text if text is not None else ""
        if self.labelEdit.text() != shown:
            self.labelEdit.setText(shown)

    def showGraphInfo(self):
        g = self.graphWidget.graph
        self.statusBar().showMessage(
            f"Vertices: {g.vertexCount()}, Edges: {g.edgeCount()}, "
            f"{'connected' if g.isConnected() else 'disconnected'}",
            6000
        )

    # --------------------------
    # Isomorphism
    # --------------------------
    def takeSnapshot(self):
        self.snapshot = self.graphWidget.graph.clone()
        self.snapshotLabel.setText(
            f"Snapshot: {self.snapshot.vertexCount()} vertices, {self.snapshot.edgeCount()} edges."
        )
        self.statusBar().showMessage("Snapshot taken.", 2000)

    def checkIsomorphism(self):
        if self.snapshot is None:
            self.statusBar().showMessage("Take a snapshot first (S).", 3000)
            return
        future = self.checker.submit(self.graphWidget.graph, self.snapshot)
        future.add_done_callback(self.isomorphismFinished.emit)
        self.statusBar().showMessage("Checking isomorphism...")

    def onIsomorphismFinished(self, future):
        if future.cancelled():
            self.statusBar().showMessage("Isomorphism check cancelled.", 3000)
            return
        try:
            same = future.result()
        except Exception as e:  # surfaced from the worker process
            logger.exception("isomorphism check failed")
            self.statusBar().showMessage(f"Isomorphism check failed: {e}", 5000)
            return
        self.statusBar().showMessage(
            "Isomorphic to the snapshot." if same else "Not isomorphic to the snapshot.", 5000
        )

    def closeEvent(self, event):
        self.checker.shutdown(wait=False)
        super().closeEvent(event)

    def showAbout(self):
        text = """
        <div style='min-width:380px'>
        <h3 style='margin:0 0 6px 0'>Graf - Graph Editor</h3>
        <div style='margin-top:4px; line-height:1.55; color:#333'>
            Draw a graph by hand: pan and zoom the canvas, drag vertices around,<br>
            join them with edges, rename them, and compare two graphs for isomorphism.
        </div>
        </div>
        """
        dlg = QMessageBox(self)
        dlg.setWindowTitle("About")
        dlg.setTextFormat(Qt.RichText)
        dlg.setText(text)
        dlg.setStandardButtons(QMessageBox.Ok)
        dlg.exec_()
