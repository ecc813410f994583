from quizcraft import create_app, socketio, EXTENSION_KEY

app = create_app()

if __name__ == '__main__':
    try:
        # Use SocketIO server to enable websockets in dev; the reloader
        # would start a second set of quiz timers
        socketio.run(app, debug=True, use_reloader=False)
    finally:
        app.extensions[EXTENSION_KEY].shutdown()
