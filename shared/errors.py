class DeviceCommandError(RuntimeError):
    pass


class AdbError(DeviceCommandError):
    pass
