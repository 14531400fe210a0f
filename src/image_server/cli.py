import subprocess

from image_server.backend.app.runner import run as api_run


def main():
    api_proc = api_run()
    try:
        api_proc.wait()
    except KeyboardInterrupt:
        print("\n Ctrl+C received, shutting down...")
    finally:
        if api_proc.poll() is None:
            api_proc.terminate()
            try:
                api_proc.wait(timeout=5)
            except subprocess.TimeoutExpired:
                api_proc.kill()


if __name__ == "__main__":
    main()
