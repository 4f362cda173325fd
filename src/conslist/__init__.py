from conslist import logconfig

logconfig.configure_root_logger()
