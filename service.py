#!/usr/bin/env python3
import os
import sys
import threading
import time
from bottle import Bottle, run, response

# Add lib path for imports
script_dir = os.path.dirname(os.path.abspath(__file__))
LIB_PATH = os.path.join(script_dir, 'lib')
if os.path.exists(LIB_PATH):
    sys.path.insert(0, LIB_PATH)

try:
    from drmtoday_callback import get_configured_callback
    from drmtoday_callback.base.utils import logger
    from drmtoday_callback.base.utils.environment import get_environment_manager, is_kodi_environment, parse_bool
    from routes import setup_drm_routes, setup_config_routes
except ImportError as import_err:
    print(f"DRMtoday Callback: Critical import failed - {str(import_err)}", file=sys.stderr)
    raise


class DrmtodayService:
    def __init__(self, callback=None):
        self.app = Bottle()

        self.env_manager = get_environment_manager()
        self.server_port = self.env_manager.get_config('server_port', 7778)

        try:
            self.callback = callback or get_configured_callback()
            logger.info("DRMtoday callback initialized")
        except Exception as init_err:
            logger.error(f"Failed to initialize callback - {str(init_err)}")
            raise

        self.setup_routes()

    def setup_routes(self):
        setup_drm_routes(self.app, self.callback)
        setup_config_routes(self.app, self.callback)

        @self.app.route('/api/status')
        def get_status():
            """Service status"""
            response.content_type = 'application/json'
            return {
                'environment': self.env_manager.get_environment(),
                'configured': self.callback.config.is_valid,
                'backend': self.callback.config.drmtoday_url,
            }


def start_service(service_instance):
    """Start the Bottle server"""
    port = service_instance.server_port
    logger.info(f"Starting server on port {port}")

    debug_mode = parse_bool(service_instance.env_manager.get_config('debug_mode'), False)

    run(service_instance.app, host='127.0.0.1', port=port, quiet=not debug_mode, debug=debug_mode)


def run_kodi_service():
    """Run service within Kodi addon context"""
    logger.info("Starting DRMtoday license service in Kodi mode")

    try:
        import xbmc
    except ImportError:
        logger.error("Kodi modules not available!")
        print("ERROR: Cannot run in Kodi mode - xbmc not available")
        return

    # Give Kodi time to initialize
    time.sleep(3)

    try:
        service = DrmtodayService()

        service_thread = threading.Thread(
            target=start_service,
            args=(service,),
            name="DrmtodayLicenseService"
        )
        service_thread.daemon = True
        service_thread.start()

        monitor = xbmc.Monitor()
        while not monitor.abortRequested():
            if monitor.waitForAbort(5):
                break

        service.callback.close()
        logger.info("Service stopped (Kodi shutdown)")
    except Exception as e:
        logger.error(f"Failed to start Kodi service: {e}")
        raise


def run_standalone_service():
    """Run service in standalone mode"""
    logger.info("Starting DRMtoday license service in standalone mode")

    service = DrmtodayService()

    print("=" * 60)
    print("DRMtoday License Service")
    print("=" * 60)
    print(f"Port: {service.server_port}")
    print(f"Backend: {service.callback.config.drmtoday_url}")
    print(f"Configured: {service.callback.config.is_valid}")
    print("=" * 60)
    print("API Endpoints:")
    print(f"  POST http://localhost:{service.server_port}/api/drm/widevine/license")
    print(f"  POST http://localhost:{service.server_port}/api/drm/playready/license")
    print(f"  POST http://localhost:{service.server_port}/api/drm/provision?url=<url>")
    print(f"  GET|POST http://localhost:{service.server_port}/api/config")
    print("=" * 60)
    print("Press Ctrl+C to stop the service")
    print("=" * 60)

    try:
        start_service(service)
    except KeyboardInterrupt:
        print("\nService stopped by user")
    except Exception as e:
        print(f"Error running service: {e}")
        sys.exit(1)
    finally:
        service.callback.close()


if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(description='DRMtoday License Service')
    parser.add_argument('--port', type=int, help='Server port (overrides config)')
    parser.add_argument('--environment', help='DRMtoday environment (production, staging, test) or URL')
    parser.add_argument('--debug', action='store_true', help='Enable debug mode')
    parser.add_argument('--kodi', action='store_true', help='Force Kodi mode (requires Kodi modules)')
    parser.add_argument('--standalone', action='store_true', help='Force standalone mode')

    args = parser.parse_args()

    env_manager = get_environment_manager()

    if args.port:
        env_manager.set_config('server_port', args.port)
        logger.info(f"Port overridden via CLI: {args.port}")

    if args.environment:
        env_manager.set_config('drmtoday_environment', args.environment)
        logger.info(f"DRMtoday environment overridden via CLI: {args.environment}")

    if args.debug:
        env_manager.set_config('debug_mode', True)
        logger.set_debug(True)
        logger.info("Debug mode enabled via CLI")

    if args.kodi:
        logger.info("Kodi mode forced by CLI argument")
        run_kodi_service()
    elif args.standalone:
        logger.info("Standalone mode forced by CLI argument")
        run_standalone_service()
    elif is_kodi_environment():
        logger.info("Kodi environment detected, running in Kodi mode")
        run_kodi_service()
    else:
        logger.info("Running in standalone mode (default)")
        run_standalone_service()
