""" Program images ("ROMs") and loading them into a machine """
from chip8.memory import RAM_SIZE
from chip8.interpreter import ENTRY_ADDRESS

class RomFileException(Exception):
    """ Thrown in cases where a ROM file is invalid """
    pass

class Rom(object):
    """ Copy of the program image as read from disk. The image is not validated until reset() is called """
    MAX_SIZE = RAM_SIZE - ENTRY_ADDRESS

    def __init__(self,data,name=None):
        self.rom_data = bytes(data)
        self.name = name

    @classmethod
    def from_path(cls,path):
        with open(path,'rb') as f:
            return cls(f.read(),name=path)

    def reset(self):
        """ Validate the image. Will raise RomFileException if it cannot be loaded """
        if not self.rom_data:
            raise RomFileException('ROM file is empty')
        if len(self.rom_data) > Rom.MAX_SIZE:
            raise RomFileException('ROM file is %d bytes, larger than the %d bytes available' % (len(self.rom_data),Rom.MAX_SIZE))

    def load_into(self,machine):
        """ Validate the image and copy it into the machine's memory at the entry address """
        self.reset()
        machine.memory.load(self.rom_data,ENTRY_ADDRESS)

    def checksum(self):
        """ Return the unsigned sum, mod 65536, of all bytes in the image """
        return sum(self.rom_data) % 65536

    def __len__(self):
        return len(self.rom_data)
