""" Tests for the memory and instruction decoding parts of chip8 """

import unittest

from chip8.memory import Memory,MemoryException,FONTSET,FONTSET_SIZE,RAM_SIZE
from chip8.instructions import Opcode,Instruction,InstructionException,DECODE_TABLE,\
                               decode,nibbles,pattern_from_encoding,create_instruction,\
                               format_description,read_instruction

class MemoryTests(unittest.TestCase):
    def test_size(self):
        mem = Memory()
        self.assertEqual(RAM_SIZE, len(mem))
        self.assertEqual(4096, len(mem))
        self.assertEqual(0, mem[0])
        self.assertEqual(0, mem[4095])

    def test_out_of_bounds(self):
        mem = Memory()
        self.assertRaises(MemoryException, mem.__getitem__, 4096)
        self.assertRaises(MemoryException, mem.__getitem__, -1)
        self.assertRaises(MemoryException, mem.__setitem__, 4096, 1)
        self.assertRaises(MemoryException, mem.word, 4095)

    def test_set_masks_to_byte(self):
        mem = Memory()
        mem[10] = 0x1FF
        self.assertEqual(0xFF, mem[10])

    def test_set_word(self):
        mem = Memory(2)
        self.assertEqual(0,mem.word(0))

        mem.set_word(0,0xFFFF)
        self.assertEqual(0xFFFF,mem.word(0))
        self.assertEqual(0xFF, mem[0])
        self.assertEqual(0xFF, mem[1])

        mem.set_word(0,0x6005)
        self.assertEqual(0x6005,mem.word(0))
        self.assertEqual(0x60,mem[0])
        self.assertEqual(0x05,mem[1])

    def test_load(self):
        mem = Memory()
        mem.load(b'\x01\x02\x03',0x200)
        self.assertEqual(bytearray([1,2,3]), mem[0x200:0x203])
        mem.load(b'\x09',4095)
        self.assertEqual(9, mem[4095])
        self.assertRaises(MemoryException, mem.load, b'\x01\x02', 4095)
        self.assertRaises(MemoryException, mem.load, b'\x01', -1)

    def test_clear(self):
        mem = Memory()
        mem.load(FONTSET,0)
        mem.clear()
        self.assertEqual(bytearray(FONTSET_SIZE), mem[0:FONTSET_SIZE])

    def test_dump(self):
        mem = Memory(4)
        mem.load(b'\x01\x02\x03\x04',0)
        self.assertEqual(['0000 01 02','0002 03 04'], mem.dump(width=2))
        self.assertEqual(['0001 02 03 04'], mem.dump(start_address=1))
        self.assertEqual(['0000 01 02 03'], mem.dump(end_address=3))

    def test_fontset(self):
        self.assertEqual(FONTSET_SIZE, len(FONTSET))
        # Glyph for 0 is a box
        self.assertEqual(bytes([0xF0,0x90,0x90,0x90,0xF0]), FONTSET[0:5])
        # Glyph for F
        self.assertEqual(bytes([0xF0,0x80,0xF0,0x80,0x80]), FONTSET[75:80])

class DecodeTests(unittest.TestCase):
    def test_nibbles(self):
        self.assertEqual((0xA,0xB,0xC,0xD), nibbles(0xABCD))
        self.assertEqual((0,0,0xE,0xE), nibbles(0x00EE))

    def test_pattern_from_encoding(self):
        self.assertEqual((0xFFFF,0x00EE), pattern_from_encoding('00EE'))
        self.assertEqual((0xF000,0x1000), pattern_from_encoding('1NNN'))
        self.assertEqual((0xF00F,0x8004), pattern_from_encoding('8XY4'))
        self.assertEqual((0xF00F,0x5000), pattern_from_encoding('5XY0'))

    def test_table_order(self):
        # Exact matches come before any family pattern
        exact = [opcode for (mask,value),opcode in DECODE_TABLE[0:3]]
        self.assertEqual(set([Opcode.nop,Opcode.cls,Opcode.ret]), set(exact))
        masks = [mask for (mask,value),opcode in DECODE_TABLE]
        self.assertEqual(0xF000, masks[-1])

    def test_decode_zero_family(self):
        self.assertEqual(Opcode.nop, decode(0x0000).opcode)
        self.assertEqual(Opcode.cls, decode(0x00E0).opcode)
        self.assertEqual(Opcode.ret, decode(0x00EE).opcode)

    def test_decode_fields(self):
        instruction = decode(0x8AB4)
        self.assertEqual(Instruction(Opcode.add_reg,0x8AB4,0xA,0xB,0xB4,0xAB4), instruction)

        instruction = decode(0x3C42)
        self.assertEqual(Opcode.se_byte, instruction.opcode)
        self.assertEqual(0xC, instruction.x)
        self.assertEqual(0x42, instruction.nn)

        instruction = decode(0x2F00)
        self.assertEqual(Opcode.call, instruction.opcode)
        self.assertEqual(0xF00, instruction.nnn)

    def test_decode_every_supported_family(self):
        expected = {0x1234: Opcode.jp,
                    0x2234: Opcode.call,
                    0x3105: Opcode.se_byte,
                    0x4105: Opcode.sne_byte,
                    0x5120: Opcode.se_reg,
                    0x6105: Opcode.ld_byte,
                    0x7105: Opcode.add_byte,
                    0x8120: Opcode.ld_reg,
                    0x8121: Opcode.or_reg,
                    0x8122: Opcode.and_reg,
                    0x8123: Opcode.xor_reg,
                    0x8124: Opcode.add_reg}
        for word,opcode in expected.items():
            self.assertEqual(opcode, decode(word).opcode, '0x%04x' % word)

    def test_decode_unknown(self):
        for word in (0x0123, 0x00E1, 0x00FF, 0x5121, 0x8125, 0x8126, 0x812E,
                     0x9120, 0xA123, 0xB123, 0xC1FF, 0xD125, 0xE19E, 0xF11E):
            self.assertRaises(InstructionException, decode, word)

    def test_decode_out_of_range(self):
        self.assertRaises(InstructionException, decode, 0x10000)
        self.assertRaises(InstructionException, decode, -1)

    def test_create_instruction(self):
        self.assertEqual(b'\x63\x05', create_instruction(Opcode.ld_byte,x=3,nn=5))
        self.assertEqual(b'\x51\x20', create_instruction(Opcode.se_reg,x=1,y=2))
        self.assertEqual(b'\x12\x34', create_instruction(Opcode.jp,nnn=0x234))
        self.assertEqual(b'\x00\xee', create_instruction(Opcode.ret))
        self.assertEqual(b'\x8a\xb4', create_instruction(Opcode.add_reg,x=0xA,y=0xB))

    def test_format_description(self):
        self.assertEqual('LD V3, 0x05', format_description(decode(0x6305)))
        self.assertEqual('JP 0x234', format_description(decode(0x1234)))
        self.assertEqual('CALL 0xabc', format_description(decode(0x2ABC)))
        self.assertEqual('ADD VA, VB', format_description(decode(0x8AB4)))
        self.assertEqual('SE V1, V2', format_description(decode(0x5120)))
        self.assertEqual('SNE VF, 0xff', format_description(decode(0x4FFF)))
        self.assertEqual('RET', format_description(decode(0x00EE)))
        self.assertEqual('CLS', format_description(decode(0x00E0)))
        self.assertEqual('NOP', format_description(decode(0x0000)))

    def test_read_instruction(self):
        mem = Memory()
        mem.load(create_instruction(Opcode.or_reg,x=1,y=2),0x300)
        handler_f,description,next_address = read_instruction(mem,0x300)
        self.assertEqual('OR V1, V2', description)
        self.assertEqual(0x302, next_address)
        self.assertTrue(callable(handler_f))

    def test_read_instruction_past_end(self):
        self.assertRaises(MemoryException, read_instruction, Memory(), 4095)

if __name__ == '__main__':
    unittest.main()
