"""Pixel-art single page UI that consumes the todo API."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["ui"])


@router.get("/", response_class=HTMLResponse)
async def quest_log_ui() -> HTMLResponse:
    """Serve the sign-in form and quest log."""
    return HTMLResponse(_APP_UI_HTML)


_APP_UI_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Pixel Quest</title>
    <style>
      * { box-sizing: border-box; }
      body { margin: 0; min-height: 100vh; font-family: ui-monospace, monospace;
             background: #1A0F2E; color: #000; }
      .hidden { display: none !important; }
      .pixel { border: 4px solid #000; box-shadow: 4px 4px 0 0 #000; }
      .inset { border: 4px solid #000;
               box-shadow: inset 2px 2px 0 0 rgba(0,0,0,0.3); }
      .screen { min-height: 100vh; display: flex; align-items: center;
                justify-content: center; padding: 1rem; }
      #signin { background: #2D1B4E; }
      .card { background: #8B5CF6; padding: 2rem; max-width: 28rem; width: 100%; }
      .title { background: #FFD93D; margin: -3rem 1.5rem 1.5rem; padding: 0.5rem;
               text-align: center; }
      .title h1 { margin: 0; letter-spacing: 0.1em; }
      .title p { margin: 0; font-size: 0.8rem; opacity: 0.7; }
      label { display: block; color: #fff; font-weight: bold; margin: 0.8rem 0 0.3rem;
              letter-spacing: 0.1em; font-size: 0.8rem; }
      input, select { background: #FFF8E7; padding: 0.6rem 0.8rem; width: 100%;
                      font-family: inherit; font-size: 1rem; }
      button.btn { padding: 0.5rem 1rem; font-weight: bold; text-transform: uppercase;
                   letter-spacing: 0.1em; cursor: pointer; font-family: inherit; }
      button.btn:active { transform: translate(2px, 2px);
                          box-shadow: 2px 2px 0 0 #000; }
      button.btn:disabled { opacity: 0.5; cursor: not-allowed; }
      .primary { background: #5B8C5A; color: #fff; }
      .secondary { background: #FFD93D; }
      .danger { background: #E63946; color: #fff; }
      .success { background: #2EC4B6; }
      .wide { width: 100%; margin-top: 1rem; }
      .error { background: #E63946; color: #fff; padding: 0.6rem; margin-top: 1rem;
               text-align: center; font-weight: bold; }
      .link { background: none; border: none; color: rgba(255,255,255,0.8);
              text-decoration: underline; cursor: pointer; margin-top: 0.8rem;
              font-family: inherit; width: 100%; }
      .divider { border-top: 4px solid rgba(0,0,0,0.3); margin-top: 1.5rem; }
      #app { max-width: 42rem; margin: 0 auto; padding: 2rem 1rem; }
      header { background: #8B5CF6; padding: 1.5rem; margin-bottom: 2rem; }
      .header-row { display: flex; justify-content: space-between;
                    align-items: center; gap: 1rem; }
      header h1 { color: #FFD93D; margin: 0; letter-spacing: 0.1em; }
      header p { color: rgba(255,255,255,0.7); margin: 0.3rem 0 0; }
      .stats { display: grid; grid-template-columns: repeat(3, 1fr); gap: 1rem;
               margin-top: 1.5rem; }
      .stat { padding: 0.6rem; text-align: center; }
      .stat strong { display: block; font-size: 1.8rem; }
      .stat span { font-size: 0.7rem; font-weight: bold; letter-spacing: 0.1em; }
      .composer { background: #4C3A6D; padding: 1rem; display: flex; gap: 0.6rem;
                  margin-bottom: 1.5rem; }
      .composer select { width: auto; }
      .item { display: flex; align-items: center; gap: 1rem; padding: 0.8rem;
              margin-bottom: 0.8rem; background: #FFF8E7; }
      .item.done { background: rgba(74,115,73,0.5); }
      .item.done .text { text-decoration: line-through; color: #6b7280; }
      .check { width: 2rem; height: 2rem; background: #FFF8E7; cursor: pointer;
               color: #fff; font-size: 1.2rem; }
      .check.on { background: #5B8C5A; }
      .text { flex: 1; word-break: break-word; }
      .bar { width: 0.75rem; height: 2rem; border: 2px solid #000; }
      .bar.low { background: #2EC4B6; }
      .bar.medium { background: #FFD93D; }
      .bar.high { background: #E63946; }
      .remove { background: none; border: none; color: #E63946; font-size: 1.4rem;
                font-weight: bold; cursor: pointer; }
      .empty { background: #4C3A6D; color: #fff; padding: 2rem; text-align: center; }
    </style>
  </head>
  <body>
    <div id="signin" class="screen hidden">
      <div class="card pixel">
        <div class="title pixel">
          <h1>PIXEL QUEST</h1>
          <p>TODO ADVENTURE</p>
        </div>
        <form id="signin-form">
          <label>EMAIL:</label>
          <input class="inset" name="email" type="email" placeholder="hero@quest.com" />
          <label>PASSWORD:</label>
          <input class="inset" name="password" type="password" placeholder="********" />
          <div id="signin-error" class="error pixel hidden"></div>
          <button id="signin-submit" class="btn pixel success wide" type="submit">
            START GAME
          </button>
          <button id="flow-toggle" class="link" type="button">
            New player? Create account
          </button>
        </form>
        <div class="divider">
          <button id="guest" class="btn pixel secondary wide" type="button">
            PLAY AS GUEST
          </button>
        </div>
      </div>
    </div>

    <div id="app" class="hidden">
      <header class="pixel">
        <div class="header-row">
          <div>
            <h1>QUEST LOG</h1>
            <p>Track your daily adventures</p>
          </div>
          <button id="logout" class="btn pixel danger" type="button">LOGOUT</button>
        </div>
        <div class="stats">
          <div class="stat pixel success"><strong id="stat-total">0</strong>
            <span>TOTAL</span></div>
          <div class="stat pixel primary"><strong id="stat-completed">0</strong>
            <span>DONE</span></div>
          <div class="stat pixel danger"><strong id="stat-pending">0</strong>
            <span>PENDING</span></div>
        </div>
      </header>
      <form id="composer" class="composer pixel">
        <input id="new-todo" class="inset" placeholder="Enter new quest..." />
        <select id="priority" class="inset">
          <option value="low">LOW</option>
          <option value="medium" selected>MED</option>
          <option value="high">HIGH</option>
        </select>
        <button class="btn pixel success" type="submit">+ ADD</button>
      </form>
      <div id="todos"></div>
    </div>

    <script>
      const state = { token: localStorage.getItem('pq-token'), flow: 'signIn',
                      socket: null };

      async function api(path, options = {}) {
        const headers = { 'Content-Type': 'application/json' };
        if (state.token) headers['Authorization'] = 'Bearer ' + state.token;
        const res = await fetch(path, { ...options, headers });
        if (res.status === 401 && path !== '/auth/sign-in') {
          showSignIn();
        }
        if (!res.ok) throw new Error(String(res.status));
        return res.status === 204 ? null : res.json();
      }

      function showSignIn() {
        state.token = null;
        localStorage.removeItem('pq-token');
        if (state.socket) state.socket.close();
        document.getElementById('app').classList.add('hidden');
        document.getElementById('signin').classList.remove('hidden');
      }

      function showApp() {
        document.getElementById('signin').classList.add('hidden');
        document.getElementById('app').classList.remove('hidden');
        const scheme = location.protocol === 'https:' ? 'wss://' : 'ws://';
        const url = scheme + location.host + '/todos/live?token='
          + encodeURIComponent(state.token);
        state.socket = new WebSocket(url);
        state.socket.onmessage = (event) => {
          const message = JSON.parse(event.data);
          if (message.query === 'list') renderTodos(message.result);
          if (message.query === 'stats') renderStats(message.result);
        };
        state.socket.onclose = (event) => {
          if (event.code === 1008) showSignIn();
        };
      }

      function renderStats(stats) {
        document.getElementById('stat-total').textContent = stats.total;
        document.getElementById('stat-completed').textContent = stats.completed;
        document.getElementById('stat-pending').textContent = stats.pending;
      }

      function renderTodos(todos) {
        const root = document.getElementById('todos');
        root.innerHTML = '';
        if (!todos.length) {
          root.innerHTML = '<div class="empty pixel"><p><strong>NO QUESTS YET!'
            + '</strong></p><p>Add your first quest above</p></div>';
          return;
        }
        for (const todo of todos) {
          const row = document.createElement('div');
          row.className = 'item pixel' + (todo.completed ? ' done' : '');
          const check = document.createElement('button');
          check.className = 'check pixel' + (todo.completed ? ' on' : '');
          check.textContent = todo.completed ? '\\u2713' : '';
          check.onclick = () => api('/todos/' + todo.id + '/toggle', { method: 'POST' });
          const text = document.createElement('p');
          text.className = 'text';
          text.textContent = todo.text;
          const bar = document.createElement('div');
          bar.className = 'bar ' + (todo.priority || 'medium');
          const remove = document.createElement('button');
          remove.className = 'remove';
          remove.textContent = '\\u00d7';
          remove.onclick = () => api('/todos/' + todo.id, { method: 'DELETE' });
          row.append(check, text, bar, remove);
          root.append(row);
        }
      }

      async function signIn(body) {
        const data = await api('/auth/sign-in', {
          method: 'POST', body: JSON.stringify(body)
        });
        state.token = data.token;
        localStorage.setItem('pq-token', data.token);
        showApp();
      }

      document.getElementById('signin-form').onsubmit = async (event) => {
        event.preventDefault();
        const form = new FormData(event.target);
        const error = document.getElementById('signin-error');
        const submit = document.getElementById('signin-submit');
        error.classList.add('hidden');
        submit.disabled = true;
        submit.textContent = 'LOADING...';
        try {
          await signIn({ kind: 'password', email: form.get('email'),
                         password: form.get('password'), flow: state.flow });
        } catch (err) {
          error.textContent = state.flow === 'signIn'
            ? 'Invalid credentials!' : 'Sign up failed!';
          error.classList.remove('hidden');
        } finally {
          submit.disabled = false;
          submit.textContent = state.flow === 'signIn' ? 'START GAME' : 'CREATE HERO';
        }
      };

      document.getElementById('flow-toggle').onclick = () => {
        state.flow = state.flow === 'signIn' ? 'signUp' : 'signIn';
        document.getElementById('flow-toggle').textContent = state.flow === 'signIn'
          ? 'New player? Create account' : 'Already have an account?';
        document.getElementById('signin-submit').textContent = state.flow === 'signIn'
          ? 'START GAME' : 'CREATE HERO';
      };

      document.getElementById('guest').onclick = () => signIn({ kind: 'anonymous' });

      document.getElementById('logout').onclick = async () => {
        try { await api('/auth/sign-out', { method: 'POST' }); }
        finally { showSignIn(); }
      };

      document.getElementById('composer').onsubmit = async (event) => {
        event.preventDefault();
        const input = document.getElementById('new-todo');
        const text = input.value.trim();
        if (!text) return;
        const priority = document.getElementById('priority').value;
        await api('/todos', { method: 'POST', body: JSON.stringify({ text, priority }) });
        input.value = '';
      };

      if (state.token) {
        api('/auth/session').then(showApp).catch(showSignIn);
      } else {
        showSignIn();
      }
    </script>
  </body>
</html>
"""
