"""Background refresh engine: fan-out, task hand-off, busy indicator, navigation, log tail."""
