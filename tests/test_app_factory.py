from quizcraft import create_app, socketio, EXTENSION_KEY


def test_served_app_starts_quiz_timers(app_config, starter, monkeypatch):
    class ServeConfig(app_config):
        TESTING = False
        AUTO_QUESTION_ENABLED = True

    monkeypatch.setattr(socketio, 'start_background_task', starter)
    application = create_app(ServeConfig)
    service = application.extensions[EXTENSION_KEY]
    try:
        assert service.question_timer.running
        assert service.watchdog.running
        assert len(starter.targets) == 2
    finally:
        service.shutdown()
    assert not any(task.running for task in starter.tasks)


def test_testing_app_leaves_timers_stopped(app_config, starter, monkeypatch):
    monkeypatch.setattr(socketio, 'start_background_task', starter)
    application = create_app(app_config)
    service = application.extensions[EXTENSION_KEY]
    assert service.question_timer is None
    assert service.watchdog is None
    assert starter.targets == []
