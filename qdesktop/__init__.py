"""Core services for a small embedded desktop: calculator, file explorer, alarm clock and service, buzzer driver and CPU temperature monitor."""

__version__ = "0.1.0"