from wagerbucks import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # Use SocketIO server so /ws subscriptions work in dev
    socketio.run(app, host=app.config['HOST'], port=app.config['PORT'], debug=True)
