""" Support classes around working with the 4K of RAM in the CHIP-8 VM """

RAM_SIZE = 4096

# Built-in hex digit sprites, 5 bytes each, stored at the bottom of RAM
FONT_ADDRESS = 0x000
FONTSET_SIZE = 80
FONTSET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0, # 0
    0x20, 0x60, 0x20, 0x20, 0x70, # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0, # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0, # 3
    0x90, 0x90, 0xF0, 0x10, 0x10, # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0, # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0, # 6
    0xF0, 0x10, 0x20, 0x40, 0x40, # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0, # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0, # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90, # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0, # B
    0xF0, 0x80, 0x80, 0x80, 0xF0, # C
    0xE0, 0x90, 0x90, 0x90, 0xE0, # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0, # E
    0xF0, 0x80, 0xF0, 0x80, 0x80, # F
])

class MemoryException(Exception):
    """ Thrown when a program reads or writes outside of RAM """
    pass

class Memory(object):
    def __init__(self, size=RAM_SIZE):
        self._raw_data = bytearray(size)

    def _check_address(self,idx):
        if idx < 0 or idx >= len(self._raw_data):
            raise MemoryException('Address 0x%04x is outside of memory (0x0000-0x%04x)' % (idx, len(self._raw_data)-1))

    def word(self, idx):
        """ Return the big-endian word at the provided address """
        return (self[idx] << 8) | self[idx+1]

    def set_word(self,idx,val):
        """ Set the two-byte word at the given index to the (unsigned) integer value """
        self[idx] = (val & 0xFF00) >> 8
        self[idx+1] = val & 0x00FF

    def load(self,data,address):
        """ Copy a block of bytes into memory starting at address """
        end_address = address + len(data)
        if address < 0 or end_address > len(self._raw_data):
            raise MemoryException('Block of %d bytes at 0x%04x does not fit in memory' % (len(data), address))
        self._raw_data[address:end_address] = data

    def clear(self):
        for i in range(0,len(self._raw_data)):
            self._raw_data[i] = 0

    def __len__(self):
        return len(self._raw_data)

    def __getitem__(self,idx):
        """ Return byte at the provided address. Slices return a copy for inspection """
        if isinstance(idx,slice):
            return self._raw_data[idx]
        self._check_address(idx)
        return self._raw_data[idx]

    def __setitem__(self,idx,val):
        """ Set byte at provided address """
        self._check_address(idx)
        self._raw_data[idx] = val & 0xFF

    def dump(self, width=16,start_address=0,end_address=None):
        """ Return the memory between the addresses as a list of hex dump lines """
        if end_address is None or end_address > len(self):
            end_address = len(self)
        lines = []
        counter = start_address
        while counter < end_address:
            row_width = min(width, end_address-counter)
            row = ['%.2x' % x for x in self._raw_data[counter:counter+row_width]]
            lines.append('%.4x %s' % (counter, ' '.join(row)))
            counter += row_width
        return lines
