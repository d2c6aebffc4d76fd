"""
初期データ
AGM 2569 報告書作成プロジェクトのチーム・フェーズ・議題
"""

from typing import Any, Dict, List

TEAM_BOOK = "COMMITTEE_BOOK"
TEAM_PROCUREMENT = "COMMITTEE_PROCUREMENT"
TEAM_INSPECTION = "COMMITTEE_INSPECTION"
TEAM_VENDOR = "VENDOR"
TEAM_FINANCE = "FINANCE"


SEED_TEAMS: List[Dict[str, Any]] = [
    {
        'id': TEAM_BOOK,
        'name': "คณะกรรมการจัดทำหนังสือ",
        'description': "รวบรวมข้อมูล จัดทำต้นฉบับ และพิสูจน์อักษร",
        'colorTag': "bg-indigo-100 text-indigo-700",
    },
    {
        'id': TEAM_PROCUREMENT,
        'name': "คณะกรรมการจัดจ้าง",
        'description': "ดำเนินการจัดซื้อจัดจ้างและกำหนด TOR",
        'colorTag': "bg-blue-100 text-blue-700",
    },
    {
        'id': TEAM_INSPECTION,
        'name': "คณะกรรมการตรวจรับ",
        'description': "ตรวจสอบความถูกต้องและอนุมัติรับมอบงาน",
        'colorTag': "bg-emerald-100 text-emerald-700",
    },
    {
        'id': TEAM_VENDOR,
        'name': "ผู้รับจ้างผลิต",
        'description': "โรงพิมพ์/ผู้รับจ้างพิมพ์และเข้าเล่ม",
        'colorTag': "bg-rose-100 text-rose-700",
    },
    {
        'id': TEAM_FINANCE,
        'name': "การเงิน/บัญชี",
        'description': "งบการเงิน บัญชี และการตรวจสอบ",
        'colorTag': "bg-amber-100 text-amber-700",
    },
]


def _task(task_id, title, description, start, end, team, person, milestone=False):
    return {
        'id': task_id,
        'title': title,
        'description': description,
        'startDate': start,
        'endDate': end,
        'teamId': team,
        'responsiblePerson': person,
        'status': "Pending",
        'progressPercent': 0,
        'isMilestone': milestone,
        'logs': [],
    }


SEED_PHASES: List[Dict[str, Any]] = [
    {
        'id': 1,
        'name': "ระยะที่ 1: การเตรียมการและการวางแผน",
        'period': "1 พ.ย. 68 – 31 ธ.ค. 68",
        'description': "เตรียมความพร้อมด้านทรัพยากร งบประมาณ และโครงสร้างพื้นฐาน",
        'tasks': [
            _task("1.1", "จัดจ้างโรงพิมพ์ (TOR)",
                  "ออก TOR พิมพ์ 4,000 เล่ม, ระบุเวลาผลิต 14 วันทำการ, กำหนดค่าปรับ",
                  "2025-11-01", "2025-11-15", TEAM_PROCUREMENT, "ประธานจัดจ้าง", milestone=True),
            _task("1.2", "เตรียมต้นฉบับภาคบรรยาย",
                  "รวบรวมสารจากประธาน, ประวัติกรรมการ, ภาพกิจกรรม",
                  "2025-11-01", "2025-12-31", TEAM_BOOK, "เลขานุการคณะทำงาน"),
            _task("1.3", "ประสานงานผู้สอบบัญชี",
                  "เชิญตรวจสอบงวดระหว่างกาล และกำหนดวันตรวจงวดสุดท้าย",
                  "2025-12-01", "2025-12-31", TEAM_FINANCE, "หัวหน้าฝ่ายบัญชี"),
        ],
    },
    {
        'id': 2,
        'name': "ระยะที่ 2: การปิดบัญชีและการตรวจสอบ (Critical)",
        'period': "2 ม.ค. 69 – 4 ก.พ. 69",
        'description': "ช่วงเวลาวิกฤต ห้ามล่าช้า กระทบวันพิมพ์",
        'tasks': [
            _task("2.1", "ปิดบัญชีเบื้องต้น",
                  "บันทึกรายการปรับปรุง ยืนยันยอดลูกหนี้/ทุนเรือนหุ้น",
                  "2026-01-02", "2026-01-15", TEAM_FINANCE, "หัวหน้าฝ่ายบัญชี"),
            _task("2.2", "ตรวจสอบบัญชีภาคสนาม",
                  "ผู้สอบบัญชีเข้าตรวจสอบเอกสาร ณ สำนักงาน",
                  "2026-01-16", "2026-01-25", TEAM_FINANCE, "ผู้สอบบัญชี"),
            _task("2.3", "อนุมัติงบการเงินและจัดสรรกำไร",
                  "ประชุม กก. พิจารณาร่างงบฯ และจัดสรรกำไร (ปันผล)",
                  "2026-01-26", "2026-01-30", TEAM_BOOK, "คณะกรรมการดำเนินการ", milestone=True),
            _task("2.4", "ลงนามในรายงานผู้สอบบัญชี",
                  "รับมอบรายงานฉบับสมบูรณ์ (Content Freeze)",
                  "2026-02-01", "2026-02-04", TEAM_FINANCE, "ผู้สอบบัญชี", milestone=True),
        ],
    },
    {
        'id': 3,
        'name': "ระยะที่ 3: การผลิตและจัดพิมพ์",
        'period': "5 ก.พ. 69 – 25 ก.พ. 69",
        'description': "กระบวนการพิมพ์ 14 วันทำการ (Day-to-day Management)",
        'tasks': [
            _task("3.1", "รวมเล่มและส่งไฟล์ (Final Assembly)",
                  "รวมงบการเงินกับภาคบรรยาย, พิสูจน์อักษรครั้งสุดท้าย",
                  "2026-02-05", "2026-02-06", TEAM_BOOK, "เลขานุการคณะทำงาน", milestone=True),
            _task("3.2a", "ตรวจปรู๊ฟสี (Digital Proof)",
                  "โรงพิมพ์ส่งปรู๊ฟ คณะกรรมการตรวจรับอนุมัติใน 24 ชม.",
                  "2026-02-09", "2026-02-11", TEAM_INSPECTION, "ประธานตรวจรับ"),
            _task("3.2b", "พิมพ์เนื้อในและเข้าเล่ม",
                  "พิมพ์, เข้าเล่ม, ตัดเจียน",
                  "2026-02-12", "2026-02-25", TEAM_VENDOR, "โรงพิมพ์"),
        ],
    },
    {
        'id': 4,
        'name': "ระยะที่ 4: การจัดส่งและกระจายหนังสือ",
        'period': "26 ก.พ. 69 – 5 มี.ค. 69",
        'description': "ส่งหนังสือถึงสมาชิกก่อนประชุม (ระวังวันหยุดมาฆบูชา 3 มี.ค.)",
        'tasks': [
            _task("4.1", "รับมอบงานและ E-Book",
                  "รับหนังสือ 4,000 เล่ม, ปล่อย E-Book ขึ้น Web/Line",
                  "2026-02-26", "2026-02-26", TEAM_INSPECTION, "คณะกรรมการตรวจรับ", milestone=True),
            _task("4.2", "กระจายหนังสือ (EMS/หน่วยงาน)",
                  "แจกจ่ายหน่วยงาน และส่ง EMS ให้ทันก่อนวันหยุด",
                  "2026-02-27", "2026-02-28", TEAM_BOOK, "ฝ่ายธุรการ"),
        ],
    },
    {
        'id': 5,
        'name': "ระยะที่ 5: วันประชุมใหญ่สามัญ (AGM)",
        'period': "13 มี.ค. 69",
        'description': "วันแห่งความสำเร็จ",
        'tasks': [
            _task("5.1", "ประชุมใหญ่สามัญประจำปี 2568",
                  "เตรียมจุดลงทะเบียน, หนังสือสำรอง, สื่อนำเสนอ",
                  "2026-03-13", "2026-03-13", TEAM_BOOK, "เลขานุการ", milestone=True),
        ],
    },
]


# (ID, タイトル, 担当チーム, 担当者)
_AGENDA_ROWS = [
    # 序章
    ("1", "สารจากผู้อำนวยการท่าเรือแห่งประเทศไทย", TEAM_BOOK, "เลขานุการ"),
    ("2", "สารจากประธานกรรมการ", TEAM_BOOK, "เลขานุการ"),
    ("3", "สารจากผู้จัดการ", TEAM_BOOK, "ผู้จัดการ"),
    ("4", "คณะกรรมการดำเนินการ ชุดที่ 19 และคณะผู้ตรวจสอบกิจการ", TEAM_BOOK, "ธุรการ"),
    ("5", "คณะกรรมการและคณะอนุกรรมการ", TEAM_BOOK, "ธุรการ"),
    ("6", "เจ้าหน้าที่สหกรณ์", TEAM_BOOK, "ธุรการ"),
    ("7", "ศูนย์ประสานงานฌาปนกิจสงเคราะห์", TEAM_BOOK, "จนท.ฌาปนกิจ"),
    ("8", "ภาพกิจกรรม", TEAM_BOOK, "ธุรการ/PR"),
    ("9", "ผลการดำเนินงานประจำปี 2567", TEAM_BOOK, "ผู้จัดการ"),
    ("10", "แผนกลยุทธ์", TEAM_BOOK, "ฝ่ายแผนงาน"),

    # 総会議事
    ("11", "หนังสือเชิญประชุมใหญ่สามัญ ประจำปี 2567", TEAM_BOOK, "เลขานุการ"),
    ("12", "ระเบียบวาระที่ 1: เรื่อง ประธานแจ้งให้ที่ประชุมทราบ", TEAM_BOOK, "ประธาน/เลขาฯ"),
    ("13", "ระเบียบวาระที่ 2: รับรองรายงานการประชุมใหญ่สามัญ ประจำปี 2566", TEAM_BOOK, "เลขานุการ"),
    ("14", "ระเบียบวาระที่ 3: เรื่อง การครบวาระของกรรมการดำเนินการชุดที่ 19", TEAM_BOOK, "กก.สรรหา"),

    # 議題4: 報告事項
    ("15", "4.1 เรื่อง รายงานผลการดำเนินงานของสหกรณ์ ประจำปี 2567", TEAM_BOOK, "ผู้จัดการ"),
    ("16", "4.2 เรื่อง การรับสมาชิกใหม่และการขาดจากสมาชิกภาพ ประจำปี 2567", TEAM_BOOK, "งานสมาชิก"),
    ("17", "4.3 เรื่อง รายงานการตรวจสอบกิจการ ประจำปี 2567", TEAM_BOOK, "ผู้ตรวจสอบกิจการ"),
    ("18", "4.4 เรื่อง ผลประโยชน์และค่าตอบแทนที่ได้รับจากสหกรณ์ ประจำปี 2567", TEAM_FINANCE, "บัญชี"),
    ("19", "4.5 เรื่อง เงินรอตรวจสอบ", TEAM_FINANCE, "บัญชี"),
    ("20", "4.6 เรื่อง ผลการดำเนินการของสันนิบาตสหกรณ์", TEAM_BOOK, "เลขานุการ"),

    # 議題5: 審議事項
    ("21", "5.1 เรื่อง พิจารณาอนุมัติงบการเงิน ประจำปี 2567", TEAM_FINANCE, "ผู้สอบบัญชี"),
    ("22", "5.2 เรื่อง พิจารณาอนุมัติการจัดสรรกำไรสุทธิ ประจำปี 2567", TEAM_FINANCE, "บัญชี/ผู้จัดการ"),
    ("23", "5.3 เรื่อง ขออนุมัติงบประมาณการรายได้และงบประมาณรายจ่าย ประจำปี 2568", TEAM_FINANCE, "บัญชี"),
    ("24", "5.4 เรื่อง คัดเลือกผู้สอบบัญชีและกำหนดค่าธรรมเนียมการตรวจสอบ ประจำปี 2568", TEAM_FINANCE, "บัญชี"),
    ("25", "5.5 เรื่อง พิจารณาการเงินหรือการลงทุน ประจำปี 2568", TEAM_BOOK, "กก.การลงทุน"),
    ("26", "5.6 เรื่อง ขออนุมัติวงเงินกู้ยืมหรือค้ำประกันของสหกรณ์ ประจำปี 2568", TEAM_FINANCE, "การเงิน"),
    ("27", "5.7 เรื่อง ขอความเห็นชอบแผนกลยุทธ์ ประจำปี 2568", TEAM_BOOK, "ฝ่ายแผนงาน"),
    ("28", "5.8 เรื่อง การสมัครเป็นสมาชิกชุมนุมสหกรณ์ออมทรัพย์รัฐวิสาหกิจไทย จำกัด", TEAM_BOOK, "ผู้จัดการ"),
    ("29", "5.9 เรื่อง ขออนุมัติโอนเงินรอตรวจสอบเข้าทุนสำรองในปี 2568", TEAM_FINANCE, "บัญชี"),
    ("30", "5.10 เรื่อง ขออนุมัติซื้อหุ้นธนาคารกรุงไทย", TEAM_BOOK, "กก.การลงทุน"),

    # 議題6・7
    ("31", "ระเบียบวาระที่ 6: เรื่อง รายงานผลการเลือกตั้งคณะกรรมการดำเนินการ ชุดที่ 20", TEAM_BOOK, "กก.เลือกตั้ง"),
    ("32", "ระเบียบวาระที่ 7: เรื่อง รายงานศูนย์ประสานงานฌาปนกิจสงเคราะห์ ประจำปี 2567", TEAM_BOOK, "จนท.ฌาปนกิจ"),
]

SEED_AGENDA_ITEMS: List[Dict[str, Any]] = [
    {
        'id': item_id,
        'title': title,
        'responsibleTeamId': team,
        'responsiblePerson': person,
        'status': "Drafting",
        'logs': [],
    }
    for item_id, title, team, person in _AGENDA_ROWS
]


def seed_dict() -> Dict[str, Any]:
    """初期データをシード形式の辞書で取得"""
    return {
        'teams': [dict(team) for team in SEED_TEAMS],
        'phases': [dict(phase, tasks=[dict(task) for task in phase['tasks']]) for phase in SEED_PHASES],
        'agendaItems': [dict(item) for item in SEED_AGENDA_ITEMS],
    }
