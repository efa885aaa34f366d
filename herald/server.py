# herald/server.py
from flask import Flask, jsonify, request
from flask_cors import CORS

from herald.config import TEST_SPEECH_TEXT
from herald.errors import HeraldError, InvalidRequest
from herald.events import log_action, log_event
from herald.nlp.intent import parse_command
from herald.skills.apps import open_app
from herald.skills.gemini import ask_gemini
from herald.skills.music import play_music
from herald.skills.news import fetch_headlines
from herald.tts import SpeechDispatcher, default_dispatcher


def _body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def respond_to(command: str) -> str:
    """Run the action a command asks for and return the text to speak."""
    intent = parse_command(command)
    print(f"[Herald] Intent={intent.intent} entity={intent.entity}")
    log_event({"type": "command", "text": command, "intent": intent.intent, "entity": intent.entity})

    if intent.intent == "open_app":
        return open_app(intent.entity or "")
    if intent.intent == "news":
        return ". ".join(a["title"] or "" for a in fetch_headlines())
    if intent.intent == "play_music":
        return play_music(intent.entity or "")["message"]
    return ask_gemini(intent.entity or command)


def create_app(dispatcher: SpeechDispatcher | None = None) -> Flask:
    app = Flask(__name__)
    CORS(app)

    def speaker() -> SpeechDispatcher:
        return dispatcher or default_dispatcher()

    @app.errorhandler(HeraldError)
    def _herald_error(e: HeraldError):
        return jsonify({"error": str(e)}), e.status

    @app.route("/api/open-app", methods=["POST"])
    def open_app_route():
        app_name = _body().get("appName") or ""
        try:
            message = open_app(str(app_name))
        except HeraldError as e:
            log_action("open_app", "failed", target=app_name, error=str(e))
            raise
        log_action("open_app", "success", target=app_name)
        return jsonify({"message": message})

    @app.route("/api/news", methods=["GET"])
    def news_route():
        articles = fetch_headlines()
        log_action("news", "success", count=len(articles))
        return jsonify({"articles": articles})

    @app.route("/api/gemini", methods=["POST"])
    def gemini_route():
        query = _body().get("query")
        if not query:
            raise InvalidRequest("No query provided")
        answer = ask_gemini(str(query))
        log_action("ask_gemini", "success", query=query)
        return jsonify({"response": answer})

    @app.route("/api/play-music", methods=["POST"])
    def play_music_route():
        song = _body().get("song")
        if not song:
            raise InvalidRequest("No song provided")
        result = play_music(str(song))
        log_action("play_music", "success", song=song, url=result["url"])
        return jsonify(result)

    @app.route("/api/speak", methods=["POST"])
    def speak_route():
        command = _body().get("command")
        if not command:
            return jsonify({"error": "No command provided"}), 400

        try:
            message = respond_to(str(command))
            result = speaker().dispatch(message)
        except Exception as e:
            print(f"[Herald][ERR] command {command!r}: {e}")
            log_action("speak", "failed", command=command, error=str(e))
            return jsonify({"error": f"Command processing failed: {e}"}), 500

        log_action("speak", "success", command=command, method=result.method)
        return jsonify({"command": command, "response": message, "speechMethod": result.method})

    @app.route("/api/test-speech", methods=["POST"])
    def test_speech_route():
        text = _body().get("text") or TEST_SPEECH_TEXT
        try:
            result = speaker().dispatch(str(text))
        except HeraldError as e:
            log_action("test_speech", "failed", error=str(e))
            return jsonify({"error": str(e)}), 500
        log_action("test_speech", "success", method=result.method)
        return jsonify({"success": True, "method": result.method})

    return app
