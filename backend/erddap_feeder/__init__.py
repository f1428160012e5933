"""ERDDAP feeder: forwards AIS-catcher weather messages to ERDDAP."""
