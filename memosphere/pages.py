from flask import Blueprint, render_template_string

from memosphere.models import MOOD_LABELS

bp = Blueprint("pages", __name__)

INDEX_TEMPLATE = """
<!doctype html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>MemoSphere</title>
    <script src="https://cdn.jsdelivr.net/npm/chart.js"></script>
    <style>
        body {
            background-color: #faf7ea;
            font-family: Arial, sans-serif;
            margin: 0;
            padding: 20px;
            color: #333;
        }
        header {
            display: flex;
            justify-content: space-between;
            align-items: center;
            margin-bottom: 20px;
        }
        nav button, .panel button {
            padding: 8px 16px;
            margin: 4px;
            border-radius: 15px;
            border: none;
            cursor: pointer;
            background-color: #d2e2fd;
        }
        nav button.active {
            background-color: #dde8ca;
        }
        .panel {
            background-color: #fff;
            border-radius: 20px;
            padding: 20px;
            max-width: 760px;
            margin: 0 auto 20px auto;
            box-shadow: 0 0 10px rgba(0,0,0,0.1);
        }
        .hidden {
            display: none;
        }
        input, textarea, select {
            width: 100%;
            box-sizing: border-box;
            border-radius: 10px;
            border: 2px solid #d3d3d3;
            padding: 8px;
            margin: 6px 0;
        }
        textarea {
            height: 180px;
            resize: vertical;
        }
        ul {
            list-style-type: none;
            padding: 0;
        }
        li {
            margin: 10px 0;
            background-color: #d2e2fd;
            padding: 10px;
            border-radius: 15px;
        }
        li .date {
            font-weight: bold;
            margin-right: 10px;
        }
        li .mood {
            float: right;
            color: #555;
        }
        .error {
            color: #b00020;
        }
        #calendar-grid {
            width: 100%;
            border-collapse: collapse;
            table-layout: fixed;
        }
        #calendar-grid th, #calendar-grid td {
            text-align: center;
            padding: 8px 0;
            border-radius: 10px;
        }
        #calendar-grid td.has-entries {
            background-color: #dde8ca;
            cursor: pointer;
            font-weight: bold;
        }
        #calendar-grid td.selected {
            background-color: #d2e2fd;
        }
        .calendar-header {
            display: flex;
            justify-content: space-between;
            align-items: center;
        }
        #detail-image {
            max-width: 100%;
            border-radius: 15px;
        }
    </style>
</head>
<body>
    <header>
        <h1>MemoSphere</h1>
        <nav id="nav" class="hidden">
            <button data-view="journal" class="active">Journal</button>
            <button data-view="calendar">Calendar</button>
            <button data-view="memories">On This Day</button>
            <button data-view="trends">Mood Trends</button>
            <button data-view="public">Public</button>
            <button id="logout-btn">Log out</button>
        </nav>
    </header>

    <section id="auth-view" class="panel">
        <h2>Sign in</h2>
        <form id="auth-form">
            <input name="username" placeholder="Username" required>
            <input name="password" type="password" placeholder="Password" required>
            <button type="submit" data-action="login">Log in</button>
            <button type="submit" data-action="register">Register</button>
        </form>
        <p id="auth-error" class="error"></p>
    </section>

    <section id="journal-view" class="panel hidden">
        <h2>What happened today?</h2>
        <form id="entry-form">
            <input name="title" placeholder="Title" required>
            <textarea name="content" placeholder="Write..." required></textarea>
            <select name="mood">
                <option value="">Let AI detect my mood</option>
                {% for mood in moods %}<option value="{{ mood }}">{{ mood }}</option>{% endfor %}
            </select>
            <input name="imageUrl" placeholder="Image URL (optional)">
            <label><input name="isPublic" type="checkbox" style="width:auto"> Share publicly</label>
            <button type="submit">Save</button>
        </form>
        <p id="entry-error" class="error"></p>
        <h2>Your entries</h2>
        <ul id="entry-list"></ul>
    </section>

    <section id="calendar-view" class="panel hidden">
        <div class="calendar-header">
            <button id="prev-month">&lt;</button>
            <h2 id="calendar-title"></h2>
            <button id="next-month">&gt;</button>
        </div>
        <table id="calendar-grid">
            <thead>
                <tr><th>Sun</th><th>Mon</th><th>Tue</th><th>Wed</th><th>Thu</th><th>Fri</th><th>Sat</th></tr>
            </thead>
            <tbody></tbody>
        </table>
        <h2 id="day-title"></h2>
        <ul id="day-list"></ul>
    </section>

    <section id="detail-view" class="panel hidden">
        <button id="back-btn">Back</button>
        <h2 id="detail-title"></h2>
        <p><span id="detail-date" class="date"></span> <span id="detail-mood"></span></p>
        <img id="detail-image" class="hidden" alt="">
        <p id="detail-content"></p>
        <p><em id="detail-insight"></em></p>
        <p id="detail-suggestion"></p>
        <button id="edit-btn">Edit</button>
        <button id="delete-btn">Delete</button>
        <form id="edit-form" class="hidden">
            <input name="title" placeholder="Title" required>
            <textarea name="content" required></textarea>
            <select name="mood">
                <option value="">No mood</option>
                {% for mood in moods %}<option value="{{ mood }}">{{ mood }}</option>{% endfor %}
            </select>
            <input name="imageUrl" placeholder="Image URL (optional)">
            <label><input name="isPublic" type="checkbox" style="width:auto"> Share publicly</label>
            <button type="submit">Save changes</button>
            <button type="button" id="cancel-edit">Cancel</button>
        </form>
        <p id="detail-error" class="error"></p>
    </section>

    <section id="memories-view" class="panel hidden">
        <h2>On this day</h2>
        <ul id="memory-list"></ul>
        <h2>Monthly reflection</h2>
        <p id="reflection"></p>
        <ul id="suggestions"></ul>
    </section>

    <section id="trends-view" class="panel hidden">
        <h2>Mood trend</h2>
        <canvas id="trendChart" width="400" height="200"></canvas>
        <h2>Mood distribution</h2>
        <canvas id="moodChart" width="400" height="200"></canvas>
    </section>

    <section id="public-view" class="panel hidden">
        <h2>Public entries</h2>
        <ul id="public-list"></ul>
    </section>

    <script>
        const charts = {};

        async function api(method, url, body) {
            const res = await fetch(url, {
                method: method,
                headers: body ? {"Content-Type": "application/json"} : {},
                body: body ? JSON.stringify(body) : undefined,
                credentials: "same-origin"
            });
            if (res.status === 204) return null;
            const data = await res.json();
            if (!res.ok) throw new Error(data.message || res.statusText);
            return data;
        }

        function el(tag, text, className) {
            const node = document.createElement(tag);
            if (text !== undefined) node.textContent = text;
            if (className) node.className = className;
            return node;
        }

        function renderEntries(target, entries, withAuthor) {
            const list = document.getElementById(target);
            list.innerHTML = "";
            if (!entries.length) {
                list.appendChild(el("p", "No entries found."));
                return;
            }
            entries.forEach(function (entry) {
                const item = el("li");
                item.appendChild(el("span", entry.createdAt.slice(0, 10), "date"));
                item.appendChild(el("strong", entry.title));
                item.appendChild(el("span", entry.mood || "", "mood"));
                if (withAuthor && entry.user) {
                    item.appendChild(el("div", "by " + (entry.user.displayName || entry.user.username)));
                }
                item.appendChild(el("p", entry.memorySummary || entry.content));
                if (entry.sentimentAnalysis && entry.sentimentAnalysis.emotionalInsight) {
                    item.appendChild(el("em", entry.sentimentAnalysis.emotionalInsight));
                }
                if (target !== "public-list") {
                    const open = el("button", "Open");
                    open.onclick = function () { openEntry(entry.id); };
                    item.appendChild(open);
                }
                list.appendChild(item);
            });
        }

        function drawChart(id, config) {
            if (charts[id]) charts[id].destroy();
            charts[id] = new Chart(document.getElementById(id), config);
        }

        async function loadJournal() {
            renderEntries("entry-list", await api("GET", "/api/entries"));
        }

        const calendarState = {year: new Date().getFullYear(), month: new Date().getMonth(), entries: []};
        let currentEntry = null;
        let detailReturn = "journal";

        function dayKey(isoDate) {
            return isoDate.slice(0, 10);
        }

        function pad(n) {
            return (n < 10 ? "0" : "") + n;
        }

        function renderCalendar() {
            const year = calendarState.year;
            const month = calendarState.month;
            const byDay = {};
            calendarState.entries.forEach(function (entry) {
                const key = dayKey(entry.createdAt);
                (byDay[key] = byDay[key] || []).push(entry);
            });

            document.getElementById("calendar-title").textContent =
                new Date(year, month, 1).toLocaleString("default", {month: "long", year: "numeric"});
            const body = document.querySelector("#calendar-grid tbody");
            body.innerHTML = "";
            document.getElementById("day-title").textContent = "";
            document.getElementById("day-list").innerHTML = "";

            const offset = new Date(year, month, 1).getDay();
            const days = new Date(year, month + 1, 0).getDate();
            let row = el("tr");
            for (let i = 0; i < offset; i++) row.appendChild(el("td"));
            for (let day = 1; day <= days; day++) {
                const key = year + "-" + pad(month + 1) + "-" + pad(day);
                const cell = el("td", String(day));
                if (byDay[key]) {
                    cell.classList.add("has-entries");
                    cell.title = byDay[key].length + " entries";
                    cell.onclick = function () {
                        body.querySelectorAll("td.selected").forEach(function (td) { td.classList.remove("selected"); });
                        cell.classList.add("selected");
                        document.getElementById("day-title").textContent = key;
                        renderEntries("day-list", byDay[key]);
                    };
                }
                row.appendChild(cell);
                if ((offset + day) % 7 === 0) {
                    body.appendChild(row);
                    row = el("tr");
                }
            }
            if (row.children.length) body.appendChild(row);
        }

        async function loadCalendar() {
            calendarState.entries = await api("GET", "/api/entries");
            renderCalendar();
        }

        function moveMonth(step) {
            const next = new Date(calendarState.year, calendarState.month + step, 1);
            calendarState.year = next.getFullYear();
            calendarState.month = next.getMonth();
            renderCalendar();
        }

        function renderDetail(entry) {
            currentEntry = entry;
            document.getElementById("detail-title").textContent = entry.title;
            document.getElementById("detail-date").textContent = entry.createdAt.slice(0, 10);
            document.getElementById("detail-mood").textContent = entry.mood || "";
            document.getElementById("detail-content").textContent = entry.content;
            const image = document.getElementById("detail-image");
            image.classList.toggle("hidden", !entry.imageUrl);
            image.src = entry.imageUrl || "";
            const analysis = entry.sentimentAnalysis || {};
            document.getElementById("detail-insight").textContent = analysis.emotionalInsight || "";
            document.getElementById("detail-suggestion").textContent = analysis.suggestion || "";
            document.getElementById("edit-form").classList.add("hidden");
            document.getElementById("detail-error").textContent = "";
        }

        async function openEntry(id) {
            const visible = document.querySelector("section.panel:not(.hidden)");
            if (visible && visible.id !== "detail-view") detailReturn = visible.id.replace("-view", "");
            renderDetail(await api("GET", "/api/entries/" + id));
            show("detail");
        }

        async function loadMemories() {
            renderEntries("memory-list", await api("GET", "/api/memories/on-this-day"));
            const insights = await api("GET", "/api/insights/monthly");
            document.getElementById("reflection").textContent = insights.monthlyReflection;
            const list = document.getElementById("suggestions");
            list.innerHTML = "";
            insights.suggestions.forEach(function (s) { list.appendChild(el("li", s)); });
        }

        async function loadTrends() {
            const stats = await api("GET", "/api/insights/moods");
            drawChart("trendChart", {
                type: "line",
                data: {
                    labels: stats.timeline.map(function (p) { return p.date; }),
                    datasets: [{label: "Mood Score", data: stats.timeline.map(function (p) { return p.score; }),
                                borderColor: "#36A2EB", fill: false}]
                }
            });
            drawChart("moodChart", {
                type: "pie",
                data: {
                    labels: stats.distribution.map(function (d) { return d.mood; }),
                    datasets: [{data: stats.distribution.map(function (d) { return d.percentage; })}]
                }
            });
        }

        async function loadPublic() {
            renderEntries("public-list", await api("GET", "/api/entries/public"), true);
        }

        const loaders = {
            journal: loadJournal,
            calendar: loadCalendar,
            memories: loadMemories,
            trends: loadTrends,
            public: loadPublic
        };

        function show(view) {
            ["auth", "journal", "calendar", "detail", "memories", "trends", "public"].forEach(function (name) {
                document.getElementById(name + "-view").classList.toggle("hidden", name !== view);
            });
            document.querySelectorAll("#nav button[data-view]").forEach(function (btn) {
                btn.classList.toggle("active", btn.dataset.view === view);
            });
            if (loaders[view]) loaders[view]();
        }

        function signedIn(signed) {
            document.getElementById("nav").classList.toggle("hidden", !signed);
            show(signed ? "journal" : "auth");
        }

        document.querySelectorAll("#nav button[data-view]").forEach(function (btn) {
            btn.onclick = function () { show(btn.dataset.view); };
        });

        document.getElementById("logout-btn").onclick = async function () {
            await api("POST", "/api/logout");
            signedIn(false);
        };

        document.getElementById("auth-form").onsubmit = async function (event) {
            event.preventDefault();
            const form = event.target;
            const action = event.submitter ? event.submitter.dataset.action : "login";
            try {
                await api("POST", "/api/" + action, {username: form.username.value, password: form.password.value});
                document.getElementById("auth-error").textContent = "";
                signedIn(true);
            } catch (err) {
                document.getElementById("auth-error").textContent = err.message;
            }
        };

        document.getElementById("entry-form").onsubmit = async function (event) {
            event.preventDefault();
            const form = event.target;
            try {
                await api("POST", "/api/entries", {
                    title: form.title.value,
                    content: form.content.value,
                    mood: form.mood.value || null,
                    imageUrl: form.imageUrl.value || null,
                    isPublic: form.isPublic.checked
                });
                form.reset();
                document.getElementById("entry-error").textContent = "";
                loadJournal();
            } catch (err) {
                document.getElementById("entry-error").textContent = err.message;
            }
        };

        document.getElementById("prev-month").onclick = function () { moveMonth(-1); };
        document.getElementById("next-month").onclick = function () { moveMonth(1); };
        document.getElementById("back-btn").onclick = function () { show(detailReturn); };

        document.getElementById("edit-btn").onclick = function () {
            const form = document.getElementById("edit-form");
            form.title.value = currentEntry.title;
            form.content.value = currentEntry.content;
            form.mood.value = currentEntry.mood || "";
            form.imageUrl.value = currentEntry.imageUrl || "";
            form.isPublic.checked = currentEntry.isPublic;
            form.classList.remove("hidden");
        };

        document.getElementById("cancel-edit").onclick = function () {
            document.getElementById("edit-form").classList.add("hidden");
        };

        document.getElementById("edit-form").onsubmit = async function (event) {
            event.preventDefault();
            const form = event.target;
            try {
                renderDetail(await api("PUT", "/api/entries/" + currentEntry.id, {
                    title: form.title.value,
                    content: form.content.value,
                    mood: form.mood.value || null,
                    imageUrl: form.imageUrl.value || null,
                    isPublic: form.isPublic.checked
                }));
            } catch (err) {
                document.getElementById("detail-error").textContent = err.message;
            }
        };

        document.getElementById("delete-btn").onclick = async function () {
            if (!confirm("Delete this entry?")) return;
            try {
                await api("DELETE", "/api/entries/" + currentEntry.id);
                show(detailReturn);
            } catch (err) {
                document.getElementById("detail-error").textContent = err.message;
            }
        };

        api("GET", "/api/user").then(function () { signedIn(true); }, function () { signedIn(false); });
    </script>
</body>
</html>
"""


@bp.route("/", methods=["GET"])
def home():
    return render_template_string(INDEX_TEMPLATE, moods=MOOD_LABELS)
