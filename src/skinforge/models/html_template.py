"""Starter page for the HTML skin mode.

The launcher exposes these element ids to the page: `btn-start`,
`btn-close`, `btn-minimize`, `progress-bar` (CSS width), `status-text` and
`progress-percent`.
"""

DEFAULT_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>Patcher</title>
  <link rel="stylesheet" href="style.css">
</head>
<body>
  <div class="patcher-container">
    <div class="header">
      <h1 id="server-name">My Server</h1>
      <div class="window-controls">
        <button id="btn-minimize" class="btn-control">&minus;</button>
        <button id="btn-close" class="btn-control btn-close">&times;</button>
      </div>
    </div>

    <div class="content">
      <div class="news-panel">
        <h2>News</h2>
        <div id="news-content">Loading news...</div>
      </div>
    </div>

    <div class="footer">
      <div class="status-area">
        <span id="status-text">Ready to start</span>
        <span id="progress-percent">0%</span>
      </div>
      <div class="progress-container">
        <div id="progress-bar" class="progress-bar"></div>
      </div>
      <button id="btn-start" class="btn-start">START GAME</button>
    </div>
  </div>
  <script src="script.js"></script>
</body>
</html>"""

DEFAULT_CSS = """* {
  margin: 0;
  padding: 0;
  box-sizing: border-box;
}

body {
  font-family: 'Segoe UI', sans-serif;
  background: linear-gradient(135deg, #1a1a2e 0%, #16213e 100%);
  color: #fff;
  overflow: hidden;
  user-select: none;
}

.patcher-container {
  width: 100vw;
  height: 100vh;
  display: flex;
  flex-direction: column;
}

.header {
  display: flex;
  justify-content: space-between;
  align-items: center;
  padding: 15px 20px;
  background: rgba(0, 0, 0, 0.3);
  -webkit-app-region: drag;
}

.window-controls {
  display: flex;
  gap: 5px;
  -webkit-app-region: no-drag;
}

.btn-control {
  width: 30px;
  height: 30px;
  border: none;
  background: rgba(255, 255, 255, 0.1);
  color: #fff;
  cursor: pointer;
  border-radius: 4px;
}

.btn-close:hover {
  background: #e81123;
}

.content {
  flex: 1;
  padding: 20px;
  overflow: auto;
}

.news-panel {
  background: rgba(0, 0, 0, 0.2);
  border-radius: 8px;
  padding: 15px;
  height: 100%;
}

.footer {
  padding: 15px 20px;
  background: rgba(0, 0, 0, 0.3);
}

.status-area {
  display: flex;
  justify-content: space-between;
  margin-bottom: 8px;
  font-size: 12px;
}

#status-text {
  color: #4ec9b0;
}

#progress-percent {
  color: #ffd700;
}

.progress-container {
  height: 20px;
  background: rgba(0, 0, 0, 0.3);
  border-radius: 10px;
  overflow: hidden;
  margin-bottom: 15px;
}

.progress-bar {
  height: 100%;
  width: 0%;
  background: linear-gradient(90deg, #4ec9b0, #00d4aa);
  transition: width 0.3s;
}

.btn-start {
  width: 100%;
  padding: 12px;
  border: none;
  background: linear-gradient(90deg, #4ec9b0, #00d4aa);
  color: #1a1a2e;
  font-weight: 600;
  cursor: pointer;
  border-radius: 6px;
}

.btn-start:disabled {
  opacity: 0.6;
  cursor: not-allowed;
}"""

DEFAULT_JS = """document.addEventListener('DOMContentLoaded', function() {
  setTimeout(function() {
    document.getElementById('news-content').innerHTML =
      '<p>Welcome to the server!</p>' +
      '<p>Use the button below to start the game.</p>';
  }, 500);
});"""
