#
# Dump the contents of a CHIP-8 ROM: summary, raw memory and a disassembly listing
#

import sys
import argparse

from chip8.interpreter import Chip8,ENTRY_ADDRESS
from chip8.instructions import InstructionException,read_instruction
from chip8.rom import Rom,RomFileException

def load(path):
    """ Return (machine, rom) with the ROM loaded, or None if it could not be loaded """
    try:
        rom = Rom.from_path(path)
        machine = Chip8()
        rom.load_into(machine)
    except (RomFileException,OSError) as e:
        print('Unable to load ROM file. %s' % e)
        return None
    return machine,rom

def disassemble(memory,start_address,end_address):
    """ Return listing lines for the words between the two addresses. Words that are not
        instructions (typically sprite data) are listed as DW """
    lines = []
    address = start_address
    while address + 1 < end_address:
        word = memory.word(address)
        try:
            handler_f,description,next_address = read_instruction(memory,address)
        except InstructionException:
            description = 'DW 0x%04x' % word
            next_address = address+2
        lines.append('%04x: %04x  %s' % (address,word,description))
        address = next_address

    # Odd-sized ROMs leave a trailing byte
    if address < end_address:
        lines.append('%04x: %02x    DB 0x%02x' % (address,memory[address],memory[address]))
    return lines

def dump(path,raw=True,disassembly=True,start_address=ENTRY_ADDRESS):
    loaded = load(path)
    if not loaded:
        return 1
    machine,rom = loaded
    end_address = ENTRY_ADDRESS + len(rom)

    print('Size:                     %d bytes' % len(rom))
    print('Load address:             0x%04x' % ENTRY_ADDRESS)
    print('End address:              0x%04x' % end_address)
    print('Checksum:                 0x%04x' % rom.checksum())
    print('')

    if raw:
        print('Raw memory\n---------\n')
        for line in machine.memory.dump(start_address=start_address,end_address=end_address):
            print(line)
        print('')

    if disassembly:
        print('Disassembly\n--------\n')
        for line in disassemble(machine.memory,start_address,end_address):
            print(line)
        print('')
    return 0

def main(*args):
    parser = argparse.ArgumentParser()
    parser.add_argument('rom',help='ROM file to dump')
    parser.add_argument('--no_raw',help='Skip the hex dump',required=False,action='store_true')
    parser.add_argument('--no_disassembly',help='Skip the disassembly listing',required=False,action='store_true')
    parser.add_argument('--start_address',help='Hex address to start dumping from',required=False,default='200')
    data = parser.parse_args(args or None)

    try:
        start_address = int(data.start_address,16)
    except ValueError:
        print('Start address %s is not a hex address' % data.start_address)
        return 1

    return dump(data.rom,raw=not data.no_raw,disassembly=not data.no_disassembly,start_address=start_address)

if __name__ == "__main__":
    sys.exit(main())
